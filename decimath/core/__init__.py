"""decimath.core -- precision contexts, result and error values, numeric helpers."""

from decimath.core.context import (
    AngularUnit as AngularUnit,
)
from decimath.core.context import (
    DecimalFamily as DecimalFamily,
)
from decimath.core.context import (
    PrecisionContext as PrecisionContext,
)
from decimath.core.context import (
    RoundingMode as RoundingMode,
)
from decimath.core.context import (
    Status as Status,
)
from decimath.core.context import (
    get_context as get_context,
)
from decimath.core.context import (
    reset_contexts as reset_contexts,
)
from decimath.core.errors import (
    ContextError as ContextError,
)
from decimath.core.errors import (
    ConvergenceError as ConvergenceError,
)
from decimath.core.errors import (
    DomainError as DomainError,
)
from decimath.core.errors import (
    MathError as MathError,
)
from decimath.core.errors import (
    PoleError as PoleError,
)
from decimath.core.result import (
    Err as Err,
)
from decimath.core.result import (
    Ok as Ok,
)
from decimath.core.result import (
    Result as Result,
)
