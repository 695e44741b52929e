"""Dashboard variable models with Pydantic v2 discriminated unions.

A dashboard variable is a named definition of one of several kinds. Only a
QueryVariable carries an expression that may mention other variables with the
``$name`` syntax. Every other kind is a leaf as far as ordering goes.

Parameter models ignore settings they do not know about (capturing regexps,
sort order, datasource and the like): only the fields the ordering engine
reads are declared. Values themselves are not validated.

The variable name is not part of the model: variables are always supplied as a
mapping of name to definition, which keeps names unique by construction.

Example (YAML):
```
env:
  kind: ConstantVariable
  parameter:
    values: [prod, staging]
instance:
  kind: QueryVariable
  parameter:
    expr: up{env="$env"}
```
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class VariableDisplay(BaseModel):
    """Presentation settings of a variable. Ignored by the ordering engine."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(None, description="Label shown instead of the variable name")
    description: str | None = None
    hidden: bool = False


class QueryVariableParameter(BaseModel):
    """Parameter of a QueryVariable."""

    model_config = ConfigDict(extra="ignore")

    expr: str = Field(..., description="Query expression, may contain $name references")


class ConstantVariableParameter(BaseModel):
    """Parameter of a ConstantVariable."""

    model_config = ConfigDict(extra="ignore")

    values: list[str] = Field(default_factory=list)


class TextVariableParameter(BaseModel):
    """Parameter of a TextVariable."""

    model_config = ConfigDict(extra="ignore")

    value: str = ""


class VariableBase(BaseModel):
    """Fields shared by every variable kind."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    display: VariableDisplay | None = None

    @property
    def expression(self) -> str | None:
        """Expression that may reference other variables, if the kind has one."""
        return None


class QueryVariable(VariableBase):
    """Variable whose values come from running a query."""

    kind: Literal["QueryVariable"]
    parameter: QueryVariableParameter

    @property
    def expression(self) -> str | None:
        return self.parameter.expr


class ConstantVariable(VariableBase):
    """Variable with a fixed list of values."""

    kind: Literal["ConstantVariable"]
    parameter: ConstantVariableParameter = Field(default_factory=ConstantVariableParameter)


class TextVariable(VariableBase):
    """Free text variable typed in by the user."""

    kind: Literal["TextVariable"]
    parameter: TextVariableParameter = Field(default_factory=TextVariableParameter)


DashboardVariable = Annotated[
    QueryVariable | ConstantVariable | TextVariable,
    Field(discriminator="kind"),
]

_variables_adapter: TypeAdapter[dict[str, DashboardVariable]] = TypeAdapter(
    dict[str, DashboardVariable]
)


def parse_variables(data: Mapping[str, Any]) -> dict[str, DashboardVariable]:
    """
    Validate a raw mapping of variable name to definition.

    Args:
        data: Mapping of name to a dict with ``kind`` and ``parameter`` keys.
            Values that are already variable models are accepted as-is.

    Returns:
        Mapping of name to validated variable model, in input order

    Raises:
        pydantic.ValidationError: If a definition is malformed or of unknown kind
    """
    return _variables_adapter.validate_python(dict(data))
