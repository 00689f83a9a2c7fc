"""
Async base class for the TFTP client implementations under test.

Both implementations are opaque executables. A transfer system knows how to
build the command line for one (fixture, operation, mode) triple, runs it as
a child process and times it; it never looks at the TFTP traffic itself.
"""

import asyncio
import logging
import os
import time
from typing import List, Optional

import psutil

from configuration import BenchmarkConfig, TERMINATE_GRACE_SECONDS
from persistence.record import TransferRecord

logger = logging.getLogger(__name__)


class TransferSystem:
    """Async base class for a TFTP client driven through its command line."""

    def __init__(self, name: str, config: BenchmarkConfig):
        self.name = name
        self.config = config

    def build_command(self, fixture: str, operation: str, transfer_mode: str) -> List[str]:
        """Return the argv performing one transfer of `fixture`."""
        raise NotImplementedError

    def command_for(self, fixture: str, operation: str, transfer_mode: str) -> List[str]:
        """Return the full argv, wrapped by the external timing tool if one is configured."""
        command = self.build_command(fixture, operation, transfer_mode)
        if self.config.time_wrapper:
            return [self.config.time_wrapper] + command
        return command

    async def run_transfer(self, fixture: str, operation: str, transfer_mode: str) -> TransferRecord:
        """Run one transfer as a child process and time it.

        The child inherits stdout and stderr so its own output interleaves
        with the harness output. Failures of the child (non-zero exit,
        missing executable, timeout) are reported in the returned record and
        never raised; cancellation terminates the child and propagates.

        Args:
            fixture: Fixture file name (not path)
            operation: 'get' or 'put'
            transfer_mode: 'octet' or 'netascii'

        Returns:
            TransferRecord describing the attempt
        """
        command = self.command_for(fixture, operation, transfer_mode)
        fixture_bytes = self._fixture_size(fixture)
        timeout = self.config.transfer_timeout

        logger.debug(f"[{self.name}] running: {' '.join(command)}")

        exit_status: Optional[int] = None
        timed_out = False
        error = ""

        start_ts = time.time()
        start = time.perf_counter()
        try:
            process = await asyncio.create_subprocess_exec(*command)
        except OSError as e:
            error = str(e)
            logger.error(f"[{self.name}] failed to launch {command[0]}: {e}")
        else:
            try:
                if timeout is None:
                    exit_status = await process.wait()
                else:
                    exit_status = await asyncio.wait_for(process.wait(), timeout=timeout)
            except asyncio.TimeoutError:
                timed_out = True
                logger.warning(f"[{self.name}] {operation} {fixture} timed out after {timeout:.1f}s")
                await self._terminate(process)
                exit_status = process.returncode
            except asyncio.CancelledError:
                logger.warning(f"[{self.name}] {operation} {fixture} interrupted, terminating child")
                await self._terminate(process)
                raise
        elapsed_s = time.perf_counter() - start
        end_ts = time.time()

        record = TransferRecord(
            implementation=self.name,
            fixture=fixture,
            fixture_bytes=fixture_bytes,
            operation=operation,
            transfer_mode=transfer_mode,
            exit_status=exit_status,
            elapsed_s=elapsed_s,
            timed_out=timed_out,
            error=error,
            start_ts=start_ts,
            end_ts=end_ts,
        )

        if exit_status not in (None, 0) and not timed_out:
            logger.error(f"[{self.name}] {operation} {fixture} exited with status {exit_status}")

        return record

    def _fixture_size(self, fixture: str) -> int:
        try:
            return os.path.getsize(self.config.fixture_path(fixture))
        except OSError:
            return -1

    async def _terminate(self, process: asyncio.subprocess.Process) -> None:
        """Terminate a child process together with everything it spawned.

        Descendants are collected first since they get reparented once the
        child dies. The direct child is reaped through asyncio only.
        """
        descendants = child_processes(process.pid)
        if process.returncode is None:
            try:
                process.terminate()
            except ProcessLookupError:
                pass

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, terminate_processes, descendants, TERMINATE_GRACE_SECONDS)

        try:
            await asyncio.wait_for(process.wait(), timeout=TERMINATE_GRACE_SECONDS)
        except asyncio.TimeoutError:
            logger.warning(f"[{self.name}] process {process.pid} ignored SIGTERM, killing it")
            process.kill()
            await process.wait()


def child_processes(pid: int) -> List[psutil.Process]:
    """Return all descendants of a process, or an empty list if it is gone."""
    try:
        return psutil.Process(pid).children(recursive=True)
    except psutil.NoSuchProcess:
        return []


def terminate_processes(procs: List[psutil.Process], grace_seconds: float = TERMINATE_GRACE_SECONDS) -> None:
    """SIGTERM processes that are not our direct children, SIGKILL survivors of the grace period."""
    if not procs:
        return

    for proc in procs:
        try:
            proc.terminate()
        except psutil.NoSuchProcess:
            pass

    _, alive = psutil.wait_procs(procs, timeout=grace_seconds)
    for proc in alive:
        logger.warning(f"Process {proc.pid} ignored SIGTERM, killing it")
        try:
            proc.kill()
        except psutil.NoSuchProcess:
            pass
