from __future__ import annotations

"""
DSL Interception Layer.

Provides the declaration interface of the BDD test DSL, the recording
implementation used for discovery, and the entry-point bindings ('describe',
'it', hooks and their skip/only variants) that test files call.

Suite bodies are genuinely executed so that nested declarations are
discovered; test and hook bodies are never invoked.
"""

import builtins
import inspect
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional

from bdd_inventory.core.discovery.assembler import insert_declaration, record_path
from bdd_inventory.core.discovery.context import DiscoveryContext
from bdd_inventory.core.discovery.site import resolve_declaration_site
from bdd_inventory.domain.errors import SuspendedSuiteError
from bdd_inventory.domain.models import (
    UNKNOWN_LOCATION,
    DeclarationKind,
    SourceLocation,
    hook_node_name,
)

logger = logging.getLogger(__name__)

Body = Callable[..., Any]

_MISSING = object()

# -----------------------------------------------------------------------------
# DECLARATION INTERFACE
# -----------------------------------------------------------------------------

class Declarations(ABC):
    """
    Capability set behind the DSL entry points.

    A runner would implement it by executing bodies; discovery implements
    it by recording declarations.
    """

    def locate(self) -> SourceLocation:
        """Return the location of the DSL call currently being handled."""
        return UNKNOWN_LOCATION

    @abstractmethod
    def declare_suite(
            self,
            name: str,
            kind: DeclarationKind,
            body: Optional[Body],
            location: Optional[SourceLocation] = None,
    ) -> None:
        pass

    @abstractmethod
    def declare_test(
            self,
            name: str,
            kind: DeclarationKind,
            body: Optional[Body],
            location: Optional[SourceLocation] = None,
    ) -> None:
        pass

    @abstractmethod
    def declare_hook(
            self,
            kind: DeclarationKind,
            body: Optional[Body],
            location: Optional[SourceLocation] = None,
    ) -> None:
        pass


class SuiteOptions:
    """
    Configuration surface handed to suite bodies.

    Every setter is inert: suites calling them during discovery must not fail.
    """

    def timeout(self, *args: Any) -> None:
        return None

    def slow(self, *args: Any) -> None:
        return None

    def retries(self, *args: Any) -> None:
        return None

# -----------------------------------------------------------------------------
# RECORDING IMPLEMENTATION
# -----------------------------------------------------------------------------

class RecordingDeclarations(Declarations):
    """
    Records declarations into a DiscoveryContext without running tests.

    Suites are recorded, then their bodies are replayed with the suite name
    pushed on the route. Tests and hooks are recorded only.
    """

    def __init__(self, context: DiscoveryContext):
        self.context = context

    def locate(self) -> SourceLocation:
        return resolve_declaration_site(cwd=self.context.cwd)

    def declare_suite(
            self,
            name: str,
            kind: DeclarationKind,
            body: Optional[Body],
            location: Optional[SourceLocation] = None,
    ) -> None:
        ctx = self.context
        site = location or self.locate()
        insert_declaration(ctx.tree, ctx.route.segments(), name, kind, site, branch=True)

        ctx.route.push(name)
        record_path(ctx.suites, ctx.route.joined())
        logger.debug(f"Suite '{ctx.route.joined()}' ({kind.value}) at {site}")

        # No containment: a raising body aborts the run with the route still open
        if body is not None:
            _run_suite_body(name, body)
        ctx.route.pop()

    def declare_test(
            self,
            name: str,
            kind: DeclarationKind,
            body: Optional[Body],
            location: Optional[SourceLocation] = None,
    ) -> None:
        ctx = self.context
        site = location or self.locate()
        insert_declaration(ctx.tree, ctx.route.segments(), name, kind, site)
        record_path(ctx.tests, ctx.route.dotted(name))

    def declare_hook(
            self,
            kind: DeclarationKind,
            body: Optional[Body],
            location: Optional[SourceLocation] = None,
    ) -> None:
        ctx = self.context
        site = location or self.locate()
        insert_declaration(ctx.tree, ctx.route.segments(), hook_node_name(kind), kind, site)

# -----------------------------------------------------------------------------
# ENTRY POINTS
# -----------------------------------------------------------------------------

class NamedEntryPoint:
    """
    Callable bound to a suite or test declaration kind.

    Supports both 'describe(name, body)' and the decorator form
    '@describe(name)'. The plain variant exposes '.only' and '.skip'.
    """

    def __init__(
            self,
            declarations: Declarations,
            kind: DeclarationKind,
            only: Optional[DeclarationKind] = None,
            skip: Optional[DeclarationKind] = None,
    ):
        self._declarations = declarations
        self.kind = kind
        if only is not None:
            self.only = NamedEntryPoint(declarations, only)
        if skip is not None:
            self.skip = NamedEntryPoint(declarations, skip)

    def __repr__(self) -> str:
        return f"<{self.kind.value} entry point>"

    def __call__(self, name: str, body: Optional[Body] = None) -> Any:
        location = self._declarations.locate()

        if body is None and not self.kind.is_suite:
            # Pending test, or decorator form: recorded at the call site either way
            self._declare(name, None, location)
            return _passthrough

        if body is None:
            def decorator(fn: Body) -> Body:
                self._declare(name, fn, location)
                return fn
            return decorator

        self._declare(name, body, location)
        return body

    def _declare(self, name: str, body: Optional[Body], location: SourceLocation) -> None:
        if self.kind.is_suite:
            self._declarations.declare_suite(name, self.kind, body, location)
        else:
            self._declarations.declare_test(name, self.kind, body, location)


class HookEntryPoint:
    """
    Callable recording a lifecycle hook.

    Accepts 'before(fn)', '@before', and the named forms
    'before("reset tables", fn)' and '@before("reset tables")'. The
    description is not recorded.
    """

    def __init__(self, declarations: Declarations, kind: DeclarationKind):
        self._declarations = declarations
        self.kind = kind

    def __repr__(self) -> str:
        return f"<{self.kind.value} hook>"

    def __call__(self, *args: Any) -> Any:
        location = self._declarations.locate()
        body = next((arg for arg in reversed(args) if callable(arg)), None)
        self._declarations.declare_hook(self.kind, body, location)
        return body if body is not None else _passthrough


def build_bindings(declarations: Declarations) -> Dict[str, Any]:
    """
    Create the global names a test file uses to declare its structure.

    Args:
        declarations: Implementation every entry point delegates to.

    Returns:
        Dict[str, Any]: Name to entry point, including mocha-style aliases.
    """
    describe = NamedEntryPoint(
        declarations,
        DeclarationKind.SUITE,
        only=DeclarationKind.SUITE_ONLY,
        skip=DeclarationKind.SUITE_SKIP,
    )
    it = NamedEntryPoint(
        declarations,
        DeclarationKind.TEST,
        only=DeclarationKind.TEST_ONLY,
        skip=DeclarationKind.TEST_SKIP,
    )
    before_each = HookEntryPoint(declarations, DeclarationKind.BEFORE_EACH)
    after_each = HookEntryPoint(declarations, DeclarationKind.AFTER_EACH)

    return {
        "describe": describe,
        "context": describe,
        "xdescribe": describe.skip,
        "xcontext": describe.skip,
        "it": it,
        "specify": it,
        "xit": it.skip,
        "xspecify": it.skip,
        "before": HookEntryPoint(declarations, DeclarationKind.BEFORE),
        "after": HookEntryPoint(declarations, DeclarationKind.AFTER),
        "beforeEach": before_each,
        "before_each": before_each,
        "afterEach": after_each,
        "after_each": after_each,
    }


@contextmanager
def install_bindings(declarations: Declarations) -> Iterator[Dict[str, Any]]:
    """
    Expose the DSL entry points as builtins for the duration of a run.

    Previous values of the same names are restored on exit, also when the
    run aborts. Bindings are process-wide while installed, so concurrent
    runs in one interpreter are not supported.

    Args:
        declarations: Implementation the installed entry points delegate to.

    Yields:
        Dict[str, Any]: The installed bindings.
    """
    bindings = build_bindings(declarations)
    saved = {name: getattr(builtins, name, _MISSING) for name in bindings}

    for name, entry_point in bindings.items():
        setattr(builtins, name, entry_point)
    try:
        yield bindings
    finally:
        for name, previous in saved.items():
            if previous is _MISSING:
                if hasattr(builtins, name):
                    delattr(builtins, name)
            else:
                setattr(builtins, name, previous)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _passthrough(fn: Body) -> Body:
    return fn


def _run_suite_body(name: str, body: Body) -> None:
    """Invoke a suite body, driving 'async def' bodies to completion."""
    args = (SuiteOptions(),) if _accepts_positional(body) else ()
    result = body(*args)

    if inspect.iscoroutine(result):
        try:
            result.send(None)
        except StopIteration:
            return
        result.close()
        raise SuspendedSuiteError(name)


def _accepts_positional(body: Body) -> bool:
    """Check whether a body expects the suite options as first argument."""
    try:
        params = inspect.signature(body).parameters.values()
    except (TypeError, ValueError):
        return False

    for p in params:
        if p.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            return p.default is inspect.Parameter.empty
    return False
