"""
Tool Base Interface

Canonical Tool contract for the agent's tools.
A tool receives two structurally distinct inputs, each validated against
its own schema:

- input:        arguments chosen by the model (input_model)
- dependencies: environment supplied per request (dependencies_model)

Tools return structured data, never user-facing strings.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError


class ToolResult(BaseModel):
    """
    Structured result handed back to the model after a tool call.
    """
    output: Dict[str, Any] = Field(
        default_factory=dict,
        description="Structured output from the tool",
    )
    success: bool = Field(
        default=True,
        description="Whether the tool executed successfully",
    )
    error: Optional[str] = Field(
        default=None,
        description="Error message if execution failed",
    )

    @classmethod
    def ok(cls, output: Dict[str, Any]) -> "ToolResult":
        """Factory for successful results."""
        return cls(output=output, success=True)

    @classmethod
    def fail(cls, error: str) -> "ToolResult":
        """Factory for failed results."""
        return cls(output={}, success=False, error=error)


class Tool(ABC):
    """
    Abstract base class for all tools.

    Subclasses declare `input_model` and `dependencies_model` and implement
    `run()`. Callers go through `execute()`, which validates both inputs
    before `run()` sees them.
    """

    input_model: Type[BaseModel]
    dependencies_model: Type[BaseModel]

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique tool identifier."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description for LLM context."""
        pass

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema for tool input."""
        return self.input_model.model_json_schema()

    @property
    def dependencies_schema(self) -> Dict[str, Any]:
        """JSON Schema for the dependency bag."""
        return self.dependencies_model.model_json_schema()

    def validate_input(self, input: Any) -> BaseModel:
        if isinstance(input, self.input_model):
            return input
        try:
            return self.input_model.model_validate(input)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(f"Invalid input for {self.name}", e)

    def validate_dependencies(self, dependencies: Any) -> BaseModel:
        if isinstance(dependencies, self.dependencies_model):
            return dependencies
        try:
            return self.dependencies_model.model_validate(dependencies)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(f"Invalid dependencies for {self.name}", e)

    async def execute(self, input: Any, dependencies: Any) -> Dict[str, Any]:
        """
        Validate both inputs, then run the tool.

        Raises:
            ValidationError: input or dependencies do not match their schema
        """
        return await self.run(
            self.validate_input(input),
            self.validate_dependencies(dependencies),
        )

    @abstractmethod
    async def run(self, input: BaseModel, dependencies: BaseModel) -> Dict[str, Any]:
        """
        Execute the tool with validated input and dependencies.

        Returns:
            Structured output (dict)
        """
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tool definition for registration/display."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
            "dependencies_schema": self.dependencies_schema,
        }
