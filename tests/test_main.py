import io

import pytest

from messenger.__main__ import main
from messenger.console import Console

pytestmark = pytest.mark.asyncio


def scripted_console(*lines: str) -> Console:
    return Console(
        stdin=io.StringIO("".join(f"{line}\n" for line in lines)),
        stdout=io.StringIO(),
        stderr=io.StringIO(),
        clear_screen=False,
    )


async def test_main_runs_a_session_and_disconnects(config):
    console = scripted_console("1", "alice", "pw1", "555-0001", "2", "alice", "pw1", "10", "9")

    status = await main(config, init_schema=True, console=console)

    output = console.stdout.getvalue()
    assert status == 0
    assert "Connecting to database...Done" in output
    assert "Welcome to Messenger alice!" in output
    assert output.endswith("Disconnecting from database...Done\n\nBye !\n")


async def test_unreachable_database_is_fatal(config, tmp_path):
    config.db.path = str(tmp_path / "missing" / "messenger.db")
    console = scripted_console("9")

    status = await main(config, console=console)

    assert status == 1
    assert "Error - Unable to Connect to Database" in console.stderr.getvalue()
    output = console.stdout.getvalue()
    assert "Disconnecting from database" not in output
    assert "Bye !" not in output
