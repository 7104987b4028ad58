"""
Dispatch use case — translate a verb and hand it to the command runner.

Translation always completes before anything is spawned, so a
translation error never leaves a half-run command behind. A failing
child is reported with its own exit status; its output has already
gone straight to the terminal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from jpd.core.errors import ExecutionError, JpdError
from jpd.core.models.agent import ResolvedAgent
from jpd.core.models.command import Flag, Receipt, TranslationResult, Verb
from jpd.core.services.preflight import PreflightDecision
from jpd.core.services.translate import translate
from jpd.core.use_cases.session import Session

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Result of one verb invocation."""

    agent: ResolvedAgent | None = None
    commands: list[str] = field(default_factory=list)
    receipts: list[Receipt] = field(default_factory=list)
    preflight: PreflightDecision | None = None
    skipped: bool = False
    message: str = ""
    error: str | None = None
    exit_code: int = 0

    def fail(self, err: JpdError) -> DispatchResult:
        self.error = str(err)
        self.exit_code = err.exit_code
        return self

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            result["exit_code"] = self.exit_code
        if self.agent:
            result["agent"] = self.agent.manager.value
            result["source"] = self.agent.source.value
        result["commands"] = list(self.commands)
        result["skipped"] = self.skipped
        if self.message:
            result["message"] = self.message
        if self.preflight:
            result["preflight"] = self.preflight.to_dict()
        return result


class Dispatcher:
    """Executes translated commands for a session.

    In dry-run mode nothing is spawned: each command is passed to
    ``announce`` and recorded as skipped.
    """

    def __init__(
        self,
        session: Session,
        announce: Callable[[TranslationResult], None] | None = None,
    ):
        self._session = session
        self._announce = announce

    def execute(self, command: TranslationResult, result: DispatchResult | None = None) -> Receipt:
        """Run ``command`` in the target directory.

        Raises:
            ExecutionError: The OS refused to start it or it exited non-zero.
        """
        if result is not None:
            result.commands.append(str(command))

        if self._session.dry_run:
            if self._announce:
                self._announce(command)
            receipt = Receipt.skip(
                program=command.program,
                args=list(command.args),
                reason="dry run",
                cwd=str(self._session.target_dir),
            )
        else:
            logger.info("→ %s", command)
            receipt = self._session.toolbox.runner.run(
                command.program, command.args, cwd=self._session.target_dir
            )

        if result is not None:
            result.receipts.append(receipt)
        if receipt.failed:
            raise ExecutionError(receipt.error or f"{command.program} failed", receipt.returncode)
        return receipt


def dispatch_verb(
    session: Session,
    verb: Verb,
    flags: Iterable[Flag] = (),
    args: Iterable[str] = (),
    announce: Callable[[TranslationResult], None] | None = None,
) -> DispatchResult:
    """Translate ``verb`` for the session's manager and execute it."""
    result = DispatchResult(agent=session.agent)
    try:
        command = translate(session.request(verb, flags, args))
        Dispatcher(session, announce).execute(command, result)
    except JpdError as e:
        return result.fail(e)
    return result
