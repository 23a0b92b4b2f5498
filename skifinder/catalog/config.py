from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

AIRTABLE = "airtable"
BASEROW = "baserow"


@dataclass(frozen=True)
class CatalogConfig:
    backend: str = os.getenv("CATALOG_BACKEND", AIRTABLE).strip().lower()

    airtable_api_key: str = os.getenv("AIRTABLE_API_KEY", "")
    airtable_base_id: str = os.getenv("AIRTABLE_BASE_ID", "")
    airtable_table_name: str = os.getenv("AIRTABLE_TABLE_NAME", "Skis")
    airtable_api_url: str = "https://api.airtable.com/v0"

    baserow_token: str = os.getenv("BASEROW_TOKEN", "")
    baserow_host: str = os.getenv("BASEROW_HOST", "baserow.io")
    baserow_table_id: str = os.getenv("BASEROW_TABLE_ID", "688701")

    timeout: float = float(os.getenv("CATALOG_TIMEOUT", "10.0"))
    page_size: int = 100
    max_pages: int = 20

    @property
    def is_configured(self) -> bool:
        if self.backend == AIRTABLE:
            return bool(self.airtable_api_key and self.airtable_base_id and self.airtable_table_name)
        if self.backend == BASEROW:
            return bool(self.baserow_token and self.baserow_host and self.baserow_table_id)
        return False


DEFAULT_CATALOG_CONFIG = CatalogConfig()
