"""transact.core — result values, errors, identifiers and amounts."""

from transact.core.errors import (
    DuplicateTransactionError as DuplicateTransactionError,
)
from transact.core.errors import (
    EngineError as EngineError,
)
from transact.core.errors import (
    FieldViolation as FieldViolation,
)
from transact.core.errors import (
    IllegalTransitionError as IllegalTransitionError,
)
from transact.core.errors import (
    InputError as InputError,
)
from transact.core.errors import (
    TransactError as TransactError,
)
from transact.core.errors import (
    UnknownTransactionError as UnknownTransactionError,
)
from transact.core.errors import (
    ValidationError as ValidationError,
)
from transact.core.money import (
    TRANSACT_DECIMAL_CONTEXT as TRANSACT_DECIMAL_CONTEXT,
)
from transact.core.money import (
    parse_amount as parse_amount,
)
from transact.core.result import (
    Err as Err,
)
from transact.core.result import (
    Ok as Ok,
)
from transact.core.result import (
    Result as Result,
)
from transact.core.result import (
    unwrap as unwrap,
)
