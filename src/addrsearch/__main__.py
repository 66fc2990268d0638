from __future__ import annotations
import argparse, json, logging
from .config import get_profile
from .engine import Engine

log = logging.getLogger("addrsearch")

NO_RESULTS = "結果が見つかりませんでした。"


def main(argv: list[str] | None = None) -> int:
    profile = get_profile()

    p = argparse.ArgumentParser(description="Address search CLI (2-gram inverted index)")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--build", action="store_true", help="Build the index from --csv_path")
    g.add_argument("--search", metavar="QUERY", default=None, help="Search addresses")

    p.add_argument("--csv_path", default=profile["csv_path"], help="CSV file to index")
    p.add_argument("--index_path", default=profile["index_path"], help="Where to save/load the index")
    p.add_argument("--addresses_path", default=profile["addresses_path"],
                   help="Where to save/load the address records")
    p.add_argument("--encoding", default=profile["encoding"], help="CSV encoding")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    eng = Engine()
    try:
        if args.build:
            eng.build(
                args.csv_path,
                index_path=args.index_path,
                records_path=args.addresses_path,
                encoding=args.encoding,
                verbose=args.verbose,
            )
            print(f"Indexed {eng.stats()['records']} records -> {args.index_path}, {args.addresses_path}")
            return 0

        eng.load(index_path=args.index_path, records_path=args.addresses_path, verbose=args.verbose)
        rows = eng.search(args.search)
        if args.json:
            print(json.dumps([r.to_dict() for r in rows], ensure_ascii=False, indent=2))
        elif not rows:
            print(NO_RESULTS)
        else:
            for r in rows:
                print(r.formatted_output)
        return 0
    except (FileNotFoundError, ValueError) as e:
        log.error("%s", e)
        return 1
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
