"""Process exit codes.

Schedulers and scripts driving ``diligence`` can tell what went wrong from
the exit status alone, without parsing output.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    GENERAL = 1
    INVALID_ARGS = 2
    NOT_FOUND = 5
    DATA_CORRUPT = 6

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ExitCode.SUCCESS: "success",
    ExitCode.GENERAL: "unexpected error",
    ExitCode.INVALID_ARGS: "invalid arguments or task data",
    ExitCode.NOT_FOUND: "no task matches the given ID",
    ExitCode.DATA_CORRUPT: "stored recurrence data is corrupt",
}


def describe_exit_code(code: int) -> str:
    """``"NOT_FOUND: no task matches the given ID"`` style label for a status."""
    try:
        exit_code = ExitCode(code)
    except ValueError:
        return f"UNKNOWN({code})"
    return f"{exit_code.name}: {exit_code.description}"


def exit_codes_epilog() -> str:
    """Help text listing every exit code."""
    lines = [f"{int(code)}  {code.description}" for code in ExitCode]
    return "Exit codes:\n\n" + "\n\n".join(lines)
