import argparse
import os
from functools import lru_cache
from pathlib import Path


@lru_cache
def get_cli_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ledgerlink",
        description=(
            "Send a JSON-RPC request to a ledger node.\n\n"
            "The request is sent through the HTTP transport configured in the\n"
            "ledgerlink configuration file and the JSON response is printed."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a ledgerlink configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "Choose among: DEBUG, INFO, WARNING, ERROR, CRITICAL.\n"
            "Defaults to the `log_level` configuration value.\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    parser.add_argument(
        "method",
        type=str,
        help="Name of the JSON-RPC method, e.g. getSlot"
    )

    parser.add_argument(
        "params",
        type=str,
        nargs="?",
        default=None,
        help=(
            "Method parameters as a JSON array.\n\n"
            "Example:\n"
            "  ledgerlink getBalance '[\"<address>\", {\"commitment\": \"finalized\"}]'"
        ),
    )

    return parser.parse_args()


@lru_cache
def get_configfile() -> Path | None:
    args = get_cli_args()

    # Priority: CLI > ENV > default file in current working directory
    raw = args.config or os.getenv("LEDGERLINKCONFIG")

    if raw is None:
        file = Path.cwd() / "ledgerlink.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the LEDGERLINKCONFIG environment variable\n"
            "  - Or place a 'ledgerlink.yaml' file in the current working directory."
        )

    return file
