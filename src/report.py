from typing import Mapping, TextIO

from models import ClientAccount

HEADER = "client,available,held,total,locked"


def format_account(account: ClientAccount) -> str:
    return (
        f"{account.client_id},"
        f"{account.available},"
        f"{account.held},"
        f"{account.total},"
        f"{str(account.locked).lower()}"
    )


def write_report(accounts: Mapping[int, ClientAccount], stream: TextIO) -> None:
    """Write one CSV line per client, ordered by client id."""
    print(HEADER, file=stream)
    for client_id in sorted(accounts.keys()):
        print(format_account(accounts[client_id]), file=stream)
