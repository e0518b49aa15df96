"""
Storefront Site Resolver

Turns a SKU into the product page it refers to.
Prefix -> base URL pairs are loaded from a configurable JSON file.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional
from functools import lru_cache

from monocipher.config import get_settings
from monocipher.models.sku import ResolvedProduct
from monocipher.services.sku_service import decode_sku


logger = logging.getLogger(__name__)

DEFAULT_SITE_MAP_PATH = Path(__file__).parent.parent / "data" / "site_map.json"


@lru_cache(maxsize=4)
def _load_site_map(path: Path) -> Dict[str, str]:
    """
    Load the site map from JSON file (cached).

    Raises:
        ValueError: If the file is missing, unreadable, not valid JSON
            or not a JSON object
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            site_map = json.load(f)
    except OSError as e:
        raise ValueError(f"Cannot read site map '{path}': {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Site map '{path}' is not valid JSON: {e.msg}") from e

    if not isinstance(site_map, dict):
        raise ValueError(f"Site map '{path}' must be a JSON object of prefix -> base URL")

    logger.debug("Loaded %d site map entries from %s", len(site_map), path)
    return site_map


def get_site_map() -> Dict[str, str]:
    """
    Get the prefix -> base URL mapping.

    Returns:
        Copy of the configured site map

    Raises:
        ValueError: If the configured site map cannot be loaded
    """
    path = get_settings().site_map_path or DEFAULT_SITE_MAP_PATH
    return dict(_load_site_map(Path(path)))


def resolve_product_url(sku: str, secret_key: Optional[str] = None) -> ResolvedProduct:
    """
    Decode a SKU and build the storefront URL for it.

    Args:
        sku: SKU in the form "<prefix><separator><encrypted id>"
        secret_key: Explicit key, or None to use settings

    Returns:
        ResolvedProduct with url, prefix and product_id

    Raises:
        ValueError: If the SKU is malformed, the prefix is unknown or
            the site map cannot be loaded
    """
    decoded = decode_sku(sku, secret_key=secret_key)
    site_map = get_site_map()

    base_url = site_map.get(decoded.prefix)
    if base_url is None:
        raise ValueError(f"Unknown SKU prefix '{decoded.prefix}'")

    return ResolvedProduct(
        url=base_url + decoded.product_id,
        prefix=decoded.prefix,
        product_id=decoded.product_id,
    )
