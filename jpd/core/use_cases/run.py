"""
Run use case — scripts and tasks, with the auto-install preflight.

Order of work for ``jpd run <script>``:

    1. no script given       pick one from package.json scripts / deno tasks
    2. --if-present          absent script ends here, nothing spawned
    3. translate             any translation error stops before a spawn
    4. preflight             dev/start only; install first when needed
    5. run                   the translated script
    6. hash record           refreshed after the install, or after a
                             successful run when no install was needed
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from jpd.core.errors import ExecutionError, JpdError, ManifestError, PreflightError
from jpd.core.models.agent import Manager
from jpd.core.models.command import Flag, TranslationResult, Verb
from jpd.core.services.deps_hash import refresh_hash
from jpd.core.services.manifest import find_deno_config, load_scripts, manifest_name
from jpd.core.services.preflight import Preflight, is_guarded_script
from jpd.core.services.translate import translate, translate_dependency_sync
from jpd.core.use_cases.dispatch import DispatchResult, Dispatcher
from jpd.core.use_cases.session import Session

logger = logging.getLogger(__name__)


def pick_script(session: Session) -> str:
    """Ask the operator which script (or deno task) to run.

    Raises:
        ManifestError: No manifest, or it defines nothing runnable.
        PromptCancelled: The operator declined.
    """
    manager = session.manager
    scripts = load_scripts(session.target_dir, manager)
    if scripts is None:
        raise ManifestError(f"no {manifest_name(manager)} found in {session.target_dir}")
    if not scripts:
        kind = "tasks" if manager is Manager.DENO else "scripts"
        raise ManifestError(f"no {kind} found in {manifest_name(manager)}")

    title = "Select a task to run" if manager is Manager.DENO else "Select a script to run"
    prompt = session.toolbox.select_prompt(title, sorted(scripts))
    prompt.run()
    return prompt.value()


def run_script(
    session: Session,
    script: str | None = None,
    args: Iterable[str] = (),
    if_present: bool = False,
    auto_install: bool | None = None,
    no_volta: bool = False,
    reload_cache: bool = False,
    announce: Callable[[TranslationResult], None] | None = None,
) -> DispatchResult:
    """Run a script, installing dependencies first when the preflight says so.

    Args:
        script: Script or task name; None opens the picker.
        args: Extra arguments for the script.
        if_present: Skip silently when the script is not defined.
        auto_install: Force the preflight on/off; None uses the settings.
        no_volta: Never wrap the preflight install in ``volta run``.
        reload_cache: deno only, run ``deno cache --reload`` first.
    """
    result = DispatchResult(agent=session.agent)
    dispatcher = Dispatcher(session, announce)
    directory = session.target_dir
    manager = session.manager

    try:
        if not script:
            script = pick_script(session)

        if if_present:
            scripts = load_scripts(directory, manager) or {}
            if script not in scripts:
                result.skipped = True
                result.message = f"script {script} not found, skipping"
                logger.info("Script %s not in %s, nothing to run", script, manifest_name(manager))
                return result

        flags = {Flag.IF_PRESENT} if if_present else set()
        command = translate(session.request(Verb.RUN, flags, [script, *args]))

        enabled = session.settings.auto_install if auto_install is None else auto_install
        guarded = is_guarded_script(script, enabled)
        installed = False

        if guarded:
            if reload_cache and manager is Manager.DENO:
                _reload_deno_cache(session, dispatcher, result)

            decision = Preflight(session.toolbox.runner, session.settings).decide(directory, manager)
            result.preflight = decision
            if decision.install:
                installed = _sync_dependencies(session, dispatcher, result, no_volta)

        dispatcher.execute(command, result)

        if guarded and not installed and not session.dry_run:
            try:
                refresh_hash(directory, manager)
            except PreflightError as e:
                logger.warning("Could not record dependency hash: %s", e)
    except JpdError as e:
        return result.fail(e)

    return result


def _sync_dependencies(
    session: Session,
    dispatcher: Dispatcher,
    result: DispatchResult,
    no_volta: bool,
) -> bool:
    """Run the preflight install; True when the hash record should now be current."""
    config = find_deno_config(session.target_dir)
    flags = {Flag.NO_VOLTA} if no_volta else set()
    install = translate_dependency_sync(
        session.request(Verb.INSTALL, flags),
        config_file=config.name if config else "deno.json",
    )

    try:
        dispatcher.execute(install, result)
    except ExecutionError as e:
        if session.manager is Manager.DENO:
            # deno resolves imports itself on run; a failed warm-up is not fatal
            logger.warning("deno cache failed, continuing: %s", e)
            return False
        raise

    if not session.dry_run:
        try:
            refresh_hash(session.target_dir, session.manager)
        except PreflightError as e:
            logger.warning("Could not record dependency hash: %s", e)
    return True


def _reload_deno_cache(session: Session, dispatcher: Dispatcher, result: DispatchResult) -> None:
    config = find_deno_config(session.target_dir)
    if config is None:
        logger.info("No deno config, nothing to reload")
        return
    command = TranslationResult(program="deno", args=("cache", "--reload", config.name))
    try:
        dispatcher.execute(command, result)
    except ExecutionError as e:
        logger.warning("deno cache --reload failed, continuing: %s", e)
