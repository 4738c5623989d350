from lispy.types.function import Builtin, BuiltinFn, Closure
from lispy.types.value import (
    Error,
    ErrorKind,
    Number,
    QExpr,
    SExpr,
    Symbol,
    Value,
    copy,
    destroy,
    type_name,
)
from lispy.types.environment import Environment, create_environment
