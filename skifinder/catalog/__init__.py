"""
Catalog proxy layer.

Responsibilities:
- Hold the server-side credentials for the Airtable or Baserow table.
- Fetch the raw ski records from the selected backend.
- Normalize both backend shapes into the canonical CatalogItem.
"""
