import json
from functools import lru_cache

from pydantic import ValidationError

from ledgerlink.bootstrap.config.settings import LedgerLinkConfig
from ledgerlink.infra.http_transport import HttpTransport
from ledgerlink.infra.json_serializer import JsonSerializer


def get_rpc_transport() -> HttpTransport:
    config = get_config()
    return HttpTransport(
        url=config.rpc.url,
        headers=config.rpc.headers,
        serializer=JsonSerializer(),
        timeout=config.rpc.timeout,
    )


@lru_cache
def get_config() -> LedgerLinkConfig:
    try:
        return LedgerLinkConfig()
    except FileNotFoundError as ex:
        raise SystemExit(f"Provide a correct configuration file path: {ex}")
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
