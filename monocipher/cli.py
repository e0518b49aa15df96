"""
monocipher command line

Examples:
    monocipher encrypt Hello123World
    monocipher --key TEST_KEY decrypt MPDmYmAqD0VNqmAixa
    monocipher sku m12345678 --prefix si
    monocipher resolve si@BVuH06jcJ
    monocipher info

The key falls back to MONO_CIPHER_KEY, then to the built-in default.
Set INCLUDE_SLASH=true to use the 63-character alphabet.
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Optional

from monocipher.services import sku_service
from monocipher.services.site_resolver import resolve_product_url


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="monocipher",
        description="Deterministic monoalphabetic cipher for SKU obfuscation",
    )
    ap.add_argument("--key", default=None, help="Secret key (default: $MONO_CIPHER_KEY or built-in)")

    sub = ap.add_subparsers(dest="cmd", required=True)

    p_enc = sub.add_parser("encrypt", help="Encrypt text")
    p_enc.add_argument("text")

    p_dec = sub.add_parser("decrypt", help="Decrypt text")
    p_dec.add_argument("text")

    p_sku = sub.add_parser("sku", help="Generate a SKU from a product id")
    p_sku.add_argument("product_id")
    p_sku.add_argument("--prefix", default=None, help="Storefront prefix (default: $SKU_PREFIX or 'si')")

    p_decode = sub.add_parser("decode", help="Decode a SKU")
    p_decode.add_argument("sku")

    p_resolve = sub.add_parser("resolve", help="Resolve a SKU to its storefront URL")
    p_resolve.add_argument("sku")

    sub.add_parser("info", help="Show substitution table diagnostics")

    p_check = sub.add_parser("check", help="Encrypt/decrypt round-trip self-check")
    p_check.add_argument("text", nargs="?", default=None)

    return ap


def main(argv: Optional[list[str]] = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)

    try:
        if args.cmd == "encrypt":
            print(sku_service.encrypt(args.text, secret_key=args.key))
            return 0

        elif args.cmd == "decrypt":
            print(sku_service.decrypt(args.text, secret_key=args.key))
            return 0

        elif args.cmd == "sku":
            print(sku_service.generate_sku(args.product_id, prefix=args.prefix, secret_key=args.key))
            return 0

        elif args.cmd == "decode":
            decoded = sku_service.decode_sku(args.sku, secret_key=args.key)
            print(json.dumps({
                "prefix": decoded.prefix,
                "productId": decoded.product_id,
                "type": decoded.type,
            }))
            return 0

        elif args.cmd == "resolve":
            print(resolve_product_url(args.sku, secret_key=args.key).url)
            return 0

        elif args.cmd == "info":
            cipher = sku_service.get_cipher(args.key)
            print(json.dumps(cipher.get_table_info().as_dict(), indent=2))
            return 0

        elif args.cmd == "check":
            cipher = sku_service.get_cipher(args.key)
            ok = cipher.test_consistency() if args.text is None else cipher.test_consistency(args.text)
            print("OK" if ok else "FAILED")
            return 0 if ok else 1

        else:
            print("Unknown command.", file=sys.stderr)
            return 2

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
