"""Side Effects — launcher. Serves the engine API or prints a balance table."""

import argparse
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "13015"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def print_table(rounds: int, balance_path: Path | None) -> None:
    """Per-round pool size, pill chances, and the resulting counts."""
    from backend.balance import load_balance
    from side_effects.distribution import distribute, pool_size
    from side_effects.models import PillType
    from side_effects.pool import FALLBACK_PILL_TYPE, resolved_chances
    from side_effects.progression import pill_chances

    balance = load_balance(balance_path)
    header = f"{'round':>5} {'pills':>5}  " + "  ".join(f"{t.value:>14}" for t in PillType)
    print(header)
    print("-" * len(header))
    for r in range(1, rounds + 1):
        count = pool_size(r, balance.pool_scaling)
        table = resolved_chances(pill_chances(r, balance.pill_progression), FALLBACK_PILL_TYPE)
        counts = distribute(count, table)
        cells = "  ".join(f"{table[t]:>7.2f}% ({counts[t]:>2})" for t in PillType)
        print(f"{r:>5} {count:>5}  {cells}")


def main():
    parser = argparse.ArgumentParser(description="Side Effects engine launcher")
    parser.add_argument("--balance", type=Path, default=None,
                        help="Balance overrides JSON file (default: $BALANCE_FILE)")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the engine API")
    serve.add_argument("--host", default=HOST)
    serve.add_argument("--port", type=int, default=PORT)
    serve.add_argument("--reload", action="store_true")

    table = sub.add_parser("table", help="Print the per-round balance table")
    table.add_argument("--rounds", type=int, default=20)

    args = parser.parse_args()
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    if args.balance:
        os.environ["BALANCE_FILE"] = str(args.balance.resolve())
    balance_env = os.getenv("BALANCE_FILE")

    if args.command == "table":
        print_table(args.rounds, Path(balance_env) if balance_env else None)
        return

    import uvicorn

    host = getattr(args, "host", HOST)
    port = getattr(args, "port", PORT)
    print(f"Starting engine API on http://localhost:{port} ...")
    uvicorn.run("backend.app:app", host=host, port=port,
                reload=getattr(args, "reload", False), log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
