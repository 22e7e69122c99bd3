import asyncio
import json
import logging
from typing import Any

from ledgerlink.bootstrap.config.loader import get_cli_args
from ledgerlink.bootstrap.deps import get_config, get_rpc_transport
from ledgerlink.core.errors import LedgerLinkError
from ledgerlink.core.helpers.utils import setup_logging
from ledgerlink.core.models.message import RpcRequest, create_rpc_message


async def send(request: RpcRequest) -> Any:
    async with get_rpc_transport() as transport:
        return await transport(payload=create_rpc_message(request))


def parse_params(raw: str | None) -> Any:
    if raw is None:
        return []

    try:
        return json.loads(raw)
    except json.JSONDecodeError as ex:
        raise SystemExit(f"[params] Invalid JSON: {ex}")


def main():
    cli = get_cli_args()
    config = get_config()

    setup_logging(cli.log_level or config.log_level)
    logger = logging.getLogger("bootstrap.boot")

    request = RpcRequest(method_name=cli.method, params=parse_params(cli.params))

    try:
        response = asyncio.run(send(request))
    except LedgerLinkError as ex:
        logger.debug("Request failed", exc_info=ex)
        raise SystemExit(f"[{request.method_name}] {ex}")

    print(json.dumps(response, indent=2))


if __name__ == "__main__":
    main()
