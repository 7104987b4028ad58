"""
Tests for the translation engine — one verb, every manager.

Translators are pure: these tests build ``TranslationRequest`` objects
directly and never touch the filesystem, PATH or a process.
"""

import pytest

from jpd.core.errors import TranslationError
from jpd.core.models.agent import Manager, VersionClass
from jpd.core.models.command import Flag, TranslationRequest, Verb
from jpd.core.services.translate import (
    TRANSLATORS,
    starter_name,
    translate,
    translate_dependency_sync,
)


def req(verb, manager, *args, flags=(), modern=False, volta=None):
    return TranslationRequest(
        verb=verb,
        manager=manager,
        version_class=VersionClass.MODERN if modern else VersionClass.CLASSIC,
        flags=frozenset(flags),
        args=tuple(args),
        runtime_manager=volta,
    )


def argv(verb, manager, *args, **kwargs) -> list[str]:
    return translate(req(verb, manager, *args, **kwargs)).argv


class TestRegistry:
    def test_every_verb_has_a_translator(self):
        assert set(TRANSLATORS) == set(Verb)

    def test_translation_is_deterministic(self):
        request = req(Verb.INSTALL, Manager.PNPM, "typescript", flags={Flag.DEV})
        assert translate(request) == translate(request)


# ── install ─────────────────────────────────────────────────────


class TestInstall:
    def test_pnpm_dev_dependency(self):
        assert argv(Verb.INSTALL, Manager.PNPM, "typescript", flags={Flag.DEV}) == [
            "pnpm", "add", "typescript", "--save-dev",
        ]

    @pytest.mark.parametrize("manager, expected", [
        (Manager.NPM, ["npm", "install"]),
        (Manager.YARN, ["yarn", "install"]),
        (Manager.PNPM, ["pnpm", "install"]),
        (Manager.BUN, ["bun", "install"]),
    ])
    def test_bare_install(self, manager, expected):
        assert argv(Verb.INSTALL, manager) == expected

    def test_npm_adds_with_install(self):
        assert argv(Verb.INSTALL, Manager.NPM, "react", "react-dom") == [
            "npm", "install", "react", "react-dom",
        ]

    def test_npm_flags(self):
        assert argv(Verb.INSTALL, Manager.NPM, "eslint", flags={Flag.DEV, Flag.GLOBAL}) == [
            "npm", "install", "eslint", "--save-dev", "--global",
        ]
        assert argv(Verb.INSTALL, Manager.NPM, flags={Flag.PRODUCTION}) == [
            "npm", "install", "--omit=dev",
        ]

    def test_yarn_frozen_depends_on_version(self):
        assert argv(Verb.INSTALL, Manager.YARN, flags={Flag.FROZEN}) == [
            "yarn", "install", "--frozen-lockfile",
        ]
        assert argv(Verb.INSTALL, Manager.YARN, flags={Flag.FROZEN}, modern=True) == [
            "yarn", "install", "--immutable",
        ]

    def test_bun_dev(self):
        assert argv(Verb.INSTALL, Manager.BUN, "zod", flags={Flag.DEV}) == [
            "bun", "add", "zod", "--development",
        ]

    def test_deno_requires_packages(self):
        with pytest.raises(TranslationError, match="for deno one or more packages is required"):
            translate(req(Verb.INSTALL, Manager.DENO))

    def test_deno_rejects_production(self):
        with pytest.raises(TranslationError, match="deno doesn't support prod"):
            translate(req(Verb.INSTALL, Manager.DENO, "jsr:@std/path", flags={Flag.PRODUCTION}))

    def test_deno_add_and_global(self):
        assert argv(Verb.INSTALL, Manager.DENO, "jsr:@std/path", flags={Flag.DEV}) == [
            "deno", "add", "jsr:@std/path", "--dev",
        ]
        assert argv(Verb.INSTALL, Manager.DENO, "npm:cowsay", flags={Flag.GLOBAL}) == [
            "deno", "install", "--global", "npm:cowsay",
        ]

    def test_interactive_with_nothing_selected(self):
        with pytest.raises(TranslationError, match="no packages were selected"):
            translate(req(Verb.INSTALL, Manager.NPM, flags={Flag.INTERACTIVE}))


class TestVolta:
    def test_node_managers_are_wrapped(self):
        assert argv(Verb.INSTALL, Manager.NPM, "lodash", volta="volta") == [
            "volta", "run", "npm", "install", "lodash",
        ]

    def test_clean_install_is_not_wrapped(self):
        assert argv(Verb.CLEAN_INSTALL, Manager.PNPM, volta="volta") == [
            "pnpm", "install", "--frozen-lockfile",
        ]

    def test_no_volta_flag(self):
        assert argv(Verb.INSTALL, Manager.YARN, flags={Flag.NO_VOLTA}, volta="volta") == [
            "yarn", "install",
        ]

    def test_bun_and_deno_never_wrapped(self):
        assert argv(Verb.INSTALL, Manager.BUN, volta="volta")[0] == "bun"
        assert argv(Verb.INSTALL, Manager.DENO, "npm:chalk", volta="volta")[0] == "deno"


class TestDependencySync:
    def test_node_drops_packages_and_flags(self):
        request = req(Verb.INSTALL, Manager.PNPM, "left-pad", flags={Flag.DEV})
        assert translate_dependency_sync(request).argv == ["pnpm", "install"]

    def test_keeps_no_volta(self):
        request = req(Verb.INSTALL, Manager.NPM, flags={Flag.NO_VOLTA}, volta="volta")
        assert translate_dependency_sync(request).argv == ["npm", "install"]
        request = req(Verb.INSTALL, Manager.NPM, volta="volta")
        assert translate_dependency_sync(request).argv == ["volta", "run", "npm", "install"]

    def test_deno_caches_config(self):
        request = req(Verb.INSTALL, Manager.DENO)
        assert translate_dependency_sync(request, config_file="deno.jsonc").argv == [
            "deno", "cache", "deno.jsonc",
        ]


# ── run ─────────────────────────────────────────────────────────


class TestRun:
    def test_npm_separates_script_args(self):
        assert argv(Verb.RUN, Manager.NPM, "test", "--watch") == [
            "npm", "run", "test", "--", "--watch",
        ]

    def test_pnpm_if_present(self):
        assert argv(Verb.RUN, Manager.PNPM, "lint", flags={Flag.IF_PRESENT}) == [
            "pnpm", "run", "--if-present", "lint",
        ]

    @pytest.mark.parametrize("manager, expected", [
        (Manager.YARN, ["yarn", "run", "build", "--prod"]),
        (Manager.BUN, ["bun", "run", "build", "--prod"]),
        (Manager.DENO, ["deno", "task", "build", "--prod"]),
    ])
    def test_args_follow_script(self, manager, expected):
        assert argv(Verb.RUN, manager, "build", "--prod") == expected

    def test_script_required(self):
        with pytest.raises(TranslationError, match="script name is required"):
            translate(req(Verb.RUN, Manager.NPM))

    def test_eval_rejected(self):
        with pytest.raises(TranslationError, match="use the exec command instead"):
            translate(req(Verb.RUN, Manager.DENO, "main", "--eval", "1+1"))


# ── exec / dlx / create ─────────────────────────────────────────


class TestExec:
    @pytest.mark.parametrize("manager, expected", [
        (Manager.NPM, ["npm", "exec", "tsc", "--", "--noEmit"]),
        (Manager.PNPM, ["pnpm", "exec", "tsc", "--noEmit"]),
        (Manager.YARN, ["yarn", "tsc", "--noEmit"]),
        (Manager.BUN, ["bun", "x", "tsc", "--noEmit"]),
        (Manager.DENO, ["deno", "run", "tsc", "--noEmit"]),
    ])
    def test_table(self, manager, expected):
        assert argv(Verb.EXEC, manager, "tsc", "--noEmit") == expected

    def test_binary_required(self):
        with pytest.raises(TranslationError, match="binary name is required"):
            translate(req(Verb.EXEC, Manager.PNPM))


class TestDlx:
    @pytest.mark.parametrize("manager, modern, expected", [
        (Manager.NPM, False, ["npx", "cowsay", "hi"]),
        (Manager.PNPM, False, ["pnpm", "dlx", "cowsay", "hi"]),
        (Manager.YARN, True, ["yarn", "dlx", "cowsay", "hi"]),
        (Manager.BUN, False, ["bunx", "cowsay", "hi"]),
    ])
    def test_table(self, manager, modern, expected):
        assert argv(Verb.DLX, manager, "cowsay", "hi", modern=modern) == expected

    def test_yarn_classic_unsupported(self):
        with pytest.raises(TranslationError, match="yarn classic does not support dlx"):
            translate(req(Verb.DLX, Manager.YARN, "cowsay"))

    def test_deno_needs_url(self):
        with pytest.raises(TranslationError, match="deno dlx requires a url got cowsay"):
            translate(req(Verb.DLX, Manager.DENO, "cowsay"))
        assert argv(Verb.DLX, Manager.DENO, "https://deno.land/std/examples/welcome.ts") == [
            "deno", "run", "https://deno.land/std/examples/welcome.ts",
        ]

    def test_package_required(self):
        with pytest.raises(TranslationError, match="package name is required for dlx"):
            translate(req(Verb.DLX, Manager.BUN))


class TestCreate:
    def test_starter_name(self):
        assert starter_name("vite") == "create-vite"
        assert starter_name("create-vite") == "create-vite"
        assert starter_name("vite@5") == "create-vite@5"
        assert starter_name("@scope/app") == "@scope/app"

    @pytest.mark.parametrize("manager", [Manager.NPM, Manager.PNPM])
    def test_prefix_is_idempotent(self, manager):
        assert argv(Verb.CREATE, manager, "react-app", "my-app") == argv(
            Verb.CREATE, manager, "create-react-app", "my-app"
        )

    def test_npm_separates_starter_args(self):
        assert argv(Verb.CREATE, Manager.NPM, "vite", "app") == [
            "npm", "exec", "create-vite", "--", "app",
        ]

    def test_npm_drops_only_first_separator(self):
        assert argv(Verb.CREATE, Manager.NPM, "vite", "app", "--", "a", "--", "b") == [
            "npm", "exec", "create-vite", "--", "app", "a", "--", "b",
        ]

    def test_pnpm_uses_exec(self):
        assert argv(Verb.CREATE, Manager.PNPM, "vite", "app") == [
            "pnpm", "exec", "create-vite", "app",
        ]

    def test_yarn_classic_uses_npx(self):
        assert argv(Verb.CREATE, Manager.YARN, "react-app", "my-app") == [
            "npx", "create-react-app", "my-app",
        ]

    def test_yarn_modern_uses_dlx(self):
        assert argv(Verb.CREATE, Manager.YARN, "react-app", "my-app", modern=True) == [
            "yarn", "dlx", "create-react-app", "my-app",
        ]

    def test_npm_exactly_one_separator(self):
        assert argv(Verb.CREATE, Manager.NPM, "vite", "app", "--", "--template", "react") == [
            "npm", "exec", "create-vite", "--", "app", "--template", "react",
        ]

    def test_bun(self):
        assert argv(Verb.CREATE, Manager.BUN, "hono") == ["bunx", "create-hono"]

    def test_deno_url_only(self):
        with pytest.raises(TranslationError, match="deno create requires a url got vite"):
            translate(req(Verb.CREATE, Manager.DENO, "vite"))
        assert argv(Verb.CREATE, Manager.DENO, "https://fresh.deno.dev", "site") == [
            "deno", "run", "https://fresh.deno.dev", "site",
        ]

    def test_url_rejected_for_node(self):
        with pytest.raises(TranslationError, match="urls are not supported for npm"):
            translate(req(Verb.CREATE, Manager.NPM, "https://example.com/init.ts"))

    def test_name_required(self):
        with pytest.raises(TranslationError, match="package name is required for create"):
            translate(req(Verb.CREATE, Manager.NPM))


# ── update / uninstall / clean-install / agent ──────────────────


class TestUpdate:
    def test_npm(self):
        assert argv(Verb.UPDATE, Manager.NPM) == ["npm", "update"]
        assert argv(Verb.UPDATE, Manager.NPM, "react", flags={Flag.LATEST}) == [
            "npm", "install", "react@latest",
        ]

    def test_npm_rejects_interactive(self):
        with pytest.raises(TranslationError, match="npm does not support interactive"):
            translate(req(Verb.UPDATE, Manager.NPM, flags={Flag.INTERACTIVE}))

    def test_yarn_interactive(self):
        assert argv(Verb.UPDATE, Manager.YARN, flags={Flag.INTERACTIVE, Flag.LATEST}) == [
            "yarn", "upgrade-interactive", "--latest",
        ]

    def test_pnpm(self):
        assert argv(Verb.UPDATE, Manager.PNPM, "vue", flags={Flag.INTERACTIVE, Flag.GLOBAL}) == [
            "pnpm", "update", "--interactive", "vue", "--global",
        ]

    def test_deno_outdated(self):
        assert argv(Verb.UPDATE, Manager.DENO, flags={Flag.INTERACTIVE, Flag.LATEST}) == [
            "deno", "outdated", "-i", "--latest",
        ]


class TestUninstall:
    @pytest.mark.parametrize("manager, expected", [
        (Manager.NPM, ["npm", "uninstall", "lodash"]),
        (Manager.YARN, ["yarn", "remove", "lodash"]),
        (Manager.PNPM, ["pnpm", "remove", "lodash"]),
        (Manager.BUN, ["bun", "remove", "lodash"]),
        (Manager.DENO, ["deno", "remove", "lodash"]),
    ])
    def test_table(self, manager, expected):
        assert argv(Verb.UNINSTALL, manager, "lodash") == expected

    def test_deno_global(self):
        assert argv(Verb.UNINSTALL, Manager.DENO, "cowsay", flags={Flag.GLOBAL}) == [
            "deno", "uninstall", "cowsay",
        ]

    def test_global_and_interactive(self):
        with pytest.raises(TranslationError, match="cannot be used together"):
            translate(req(Verb.UNINSTALL, Manager.NPM, flags={Flag.GLOBAL, Flag.INTERACTIVE}))

    def test_packages_required(self):
        with pytest.raises(TranslationError, match="one or more packages is required"):
            translate(req(Verb.UNINSTALL, Manager.PNPM))


class TestCleanInstall:
    @pytest.mark.parametrize("manager, modern, expected", [
        (Manager.NPM, False, ["npm", "ci"]),
        (Manager.YARN, False, ["yarn", "install", "--frozen-lockfile"]),
        (Manager.YARN, True, ["yarn", "install", "--immutable"]),
        (Manager.BUN, False, ["bun", "install", "--frozen-lockfile"]),
    ])
    def test_table(self, manager, modern, expected):
        assert argv(Verb.CLEAN_INSTALL, manager, modern=modern) == expected

    def test_deno_unsupported(self):
        with pytest.raises(TranslationError, match="deno does not support clean-install"):
            translate(req(Verb.CLEAN_INSTALL, Manager.DENO))


class TestAgent:
    def test_passthrough(self):
        assert argv(Verb.AGENT, Manager.BUN, "pm", "ls", "--all") == ["bun", "pm", "ls", "--all"]
