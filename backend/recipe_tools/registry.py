"""
Tool Registry and Dispatcher
Validates tool input/output against declared schemas and routes calls to handlers
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import pydantic
from pydantic import BaseModel, TypeAdapter

from recipe_tools.errors import (
    ExternalCollaboratorFailure,
    InternalContractViolation,
    NotFound,
    ToolError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolSpec:
    """
    A tool contract: validated input model, output type and the handler.

    `external` marks handlers backed by a collaborator (recipe source,
    favorites store); their unexpected exceptions are reported as
    ExternalCollaboratorFailure instead of propagating.
    """
    name: str
    description: str
    input_model: type[BaseModel]
    output_type: Any
    handler: Callable[[Any], Any]
    external: bool = False


@dataclass
class ToolResult:
    success: bool
    data: Any = None
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "data": self.data,
            "error": self.error
        }


def _violations(exc: pydantic.ValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "<root>",
            "constraint": err["type"],
            "message": err["msg"]
        }
        for err in exc.errors()
    ]


class ToolRegistry:
    """Append-only during startup, read-only once frozen"""

    def __init__(self):
        self._specs: dict[str, ToolSpec] = {}
        self._output_adapters: dict[str, TypeAdapter] = {}
        self._frozen = False

    def register(self, spec: ToolSpec) -> None:
        if self._frozen:
            raise RuntimeError(f"Cannot register '{spec.name}': registry is frozen")
        if spec.name in self._specs:
            raise ValueError(f"Tool '{spec.name}' is already registered")
        self._specs[spec.name] = spec
        self._output_adapters[spec.name] = TypeAdapter(spec.output_type)

    def freeze(self) -> "ToolRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def names(self) -> list[str]:
        return list(self._specs)

    def get(self, name: str) -> ToolSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise NotFound(f"Unknown tool '{name}'", {"tool": name}) from None

    def output_adapter(self, name: str) -> TypeAdapter:
        self.get(name)
        return self._output_adapters[name]

    def describe(self) -> list[dict]:
        """Tool catalogue in the shape an agent advertises to its model"""
        return [
            {
                "name": spec.name,
                "description": spec.description,
                "inputSchema": spec.input_model.model_json_schema(),
                "outputSchema": self._output_adapters[name].json_schema()
            }
            for name, spec in self._specs.items()
        ]


class Dispatcher:
    """Routes tool calls through input validation, the handler and output validation"""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def invoke(self, name: str, raw_input: Any) -> Any:
        """Run a tool and return its JSON-ready output; raises ToolError subclasses"""
        spec = self.registry.get(name)

        try:
            params = spec.input_model.model_validate(raw_input)
        except pydantic.ValidationError as e:
            violations = _violations(e)
            logger.info("Rejected input for %s: %d violation(s)", name, len(violations))
            raise ValidationError(f"Invalid input for tool '{name}'", violations) from None

        result = await self._run_handler(spec, params)

        adapter = self.registry.output_adapter(name)
        try:
            validated = adapter.validate_python(result)
        except pydantic.ValidationError as e:
            logger.error("Tool %s returned output violating its schema: %s", name, e, exc_info=True)
            raise InternalContractViolation(
                f"Tool '{name}' produced output that violates its schema",
                {"violations": _violations(e)}
            ) from e

        logger.debug("Tool %s succeeded", name)
        return adapter.dump_python(validated, mode="json", exclude_none=True)

    async def invoke_structured(self, name: str, raw_input: Any) -> ToolResult:
        """Like invoke, but every ToolError comes back as a structured failure"""
        try:
            data = await self.invoke(name, raw_input)
        except ToolError as e:
            return ToolResult(success=False, error=e.to_dict())
        return ToolResult(success=True, data=data)

    async def _run_handler(self, spec: ToolSpec, params: BaseModel) -> Any:
        try:
            result = spec.handler(params)
            if inspect.isawaitable(result):
                result = await result
            return result
        except ToolError:
            raise
        except Exception as e:
            if not spec.external:
                raise
            logger.warning("Tool %s collaborator failed: %s", spec.name, type(e).__name__)
            logger.debug("Tool %s collaborator error: %s", spec.name, e)
            raise ExternalCollaboratorFailure(
                f"Tool '{spec.name}' failed: {e}",
                {"tool": spec.name, "error_type": type(e).__name__}
            ) from e
