"""CLI tools for Document Insights.

- ``python -m src.cli.insights`` -- extract document text, fetch Confluence
  pages, ask AI questions about local files, list configured providers.
"""
