"""Completion poller: wait for a dispatched command to reach a terminal state.

State machine over the statuses reported by SSM:

    not visible yet ──┐
    Pending ──────────┤  sleep delay_ms, poll again (one attempt each)
    Delayed ──────────┤
    InProgress ───────┘
    Success ──────────── return CommandOutcome
    Failed/Cancelled ─── raise RemoteExecutionError
    anything else ────── raise UnexpectedStatusError

Errors other than "not visible yet" propagate on first occurrence. Running
out of attempts raises CommandTimeoutError.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ssm_beam.errors import (
    CommandTimeoutError,
    InvocationNotVisibleError,
    RemoteExecutionError,
)
from ssm_beam.models import CommandOutcome, CommandStatus
from ssm_beam.utils.progress import LoggingObserver

if TYPE_CHECKING:
    from ssm_beam.protocols import CommandRunner, TransferObserver

NO_ERROR_OUTPUT = "No error output"

Sleep = Callable[[float], Awaitable[None]]


async def wait_for_command(
    command_id: str,
    instance_id: str,
    *,
    runner: "CommandRunner",
    max_attempts: int = 60,
    delay_ms: int = 2000,
    observer: "TransferObserver | None" = None,
    sleep: Sleep = asyncio.sleep,
) -> CommandOutcome:
    """Poll a command invocation until it succeeds, fails, or times out.

    Args:
        command_id: Command id returned by the dispatcher
        instance_id: Instance the command was sent to
        runner: CommandRunner used for status queries
        max_attempts: Maximum number of status queries (default: 60)
        delay_ms: Pause between non-terminal polls in ms (default: 2000)
        observer: Progress observer (default: LoggingObserver)
        sleep: Coroutine used for the pause (default: asyncio.sleep)

    Returns:
        CommandOutcome with status Success and captured stdout

    Raises:
        RemoteExecutionError: Command finished as Failed or Cancelled
        UnexpectedStatusError: Status outside the known set
        CommandTimeoutError: Budget exhausted while still running
        Exception: Any other status query error, unchanged
    """
    observer = observer or LoggingObserver()
    delay = delay_ms / 1000

    observer.info(f"Waiting for SSM command {command_id} to complete...")

    for attempt in range(1, max_attempts + 1):
        try:
            invocation = await asyncio.to_thread(
                runner.get_invocation, command_id, instance_id
            )
        except InvocationNotVisibleError:
            observer.info(
                f"Attempt {attempt}/{max_attempts}: "
                "Command invocation not yet available"
            )
        else:
            status = CommandStatus.parse(invocation.status)

            if status is CommandStatus.SUCCESS:
                observer.info("SSM command completed successfully")
                return CommandOutcome(
                    command_id=command_id,
                    status=status,
                    output=invocation.stdout or "",
                )

            if status.is_failure:
                raise RemoteExecutionError(
                    command_id,
                    status.value,
                    invocation.stderr or NO_ERROR_OUTPUT,
                )

            observer.info(
                f"Attempt {attempt}/{max_attempts}: Command status is {status.value}"
            )

        # No pause once the budget is spent
        if attempt < max_attempts:
            await sleep(delay)

    raise CommandTimeoutError(command_id, max_attempts * delay_ms / 1000)
