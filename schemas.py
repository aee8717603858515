from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field

from config import Config
from Expressions import Constant, Variable, Ln, BINARY_OPERATORS


# -------------------------------------------------------------------
# Expression Tree Nodes
# Every node is rebuilt through the simplifying constructors, so a tree
# sent by a client is normalized (or rejected) exactly like one built in code.
# -------------------------------------------------------------------
class ConstantNode(BaseModel):
    kind: Literal["constant"]
    value: float

    def to_expression(self):
        return Constant(self.value)


class VariableNode(BaseModel):
    kind: Literal["variable"]
    name: str = Field(min_length=1)

    def to_expression(self):
        return Variable(self.name)


class BinaryNode(BaseModel):
    kind: Literal["add", "sub", "mul", "div", "pow"]
    lhs: "ExpressionNode"
    rhs: "ExpressionNode"

    def to_expression(self):
        operator = BINARY_OPERATORS[self.kind]
        return operator.create(self.lhs.to_expression(), self.rhs.to_expression())


class LnNode(BaseModel):
    kind: Literal["ln"]
    operand: "ExpressionNode"

    def to_expression(self):
        return Ln.create(self.operand.to_expression())


ExpressionNode = Annotated[
    Union[ConstantNode, VariableNode, BinaryNode, LnNode],
    Field(discriminator="kind"),
]

BinaryNode.model_rebuild()
LnNode.model_rebuild()


# -------------------------------------------------------------------
# Request Models
# -------------------------------------------------------------------
class DifferentiationInput(BaseModel):
    expression: ExpressionNode
    variable: str = Field(default=Config.DEFAULT_VARIABLE, min_length=1)


class GenerationInput(BaseModel):
    num_terms: int = Field(default=3, ge=1, le=Config.MAX_GENERATED_TERMS)
    max_depth: int = Field(default=2, ge=0, le=Config.MAX_GENERATED_DEPTH)
    variables: List[str] = Field(default_factory=lambda: [Config.DEFAULT_VARIABLE], min_length=1)
