"""decimath -- elementary and special functions on arbitrary-precision decimals."""

from decimath.checked import (
    checked as checked,
)
from decimath.constants import (
    clear_cache as clear_cache,
)
from decimath.constants import (
    ln2 as ln2,
)
from decimath.constants import (
    pi as pi,
)
from decimath.hyperbolic import (
    acosh as acosh,
)
from decimath.hyperbolic import (
    asinh as asinh,
)
from decimath.hyperbolic import (
    atanh as atanh,
)
from decimath.hyperbolic import (
    cosh as cosh,
)
from decimath.hyperbolic import (
    sinh as sinh,
)
from decimath.hyperbolic import (
    tanh as tanh,
)
from decimath.powers import (
    exp as exp,
)
from decimath.powers import (
    exp2 as exp2,
)
from decimath.powers import (
    expm1 as expm1,
)
from decimath.powers import (
    ln as ln,
)
from decimath.powers import (
    ln1p as ln1p,
)
from decimath.powers import (
    log2 as log2,
)
from decimath.powers import (
    log10 as log10,
)
from decimath.powers import (
    pow as pow,  # noqa: A004
)
from decimath.powers import (
    pow_int as pow_int,
)
from decimath.roots import (
    cbrt as cbrt,
)
from decimath.roots import (
    hypot as hypot,
)
from decimath.roots import (
    root as root,
)
from decimath.roots import (
    sqrt as sqrt,
)
from decimath.series import (
    SinCos as SinCos,
)
from decimath.special import (
    comb as comb,
)
from decimath.special import (
    erf as erf,
)
from decimath.special import (
    factorial as factorial,
)
from decimath.special import (
    gamma as gamma,
)
from decimath.special import (
    log_gamma as log_gamma,
)
from decimath.special import (
    perm as perm,
)
from decimath.trig import (
    acos as acos,
)
from decimath.trig import (
    asin as asin,
)
from decimath.trig import (
    atan as atan,
)
from decimath.trig import (
    atan2 as atan2,
)
from decimath.trig import (
    cos as cos,
)
from decimath.trig import (
    sin as sin,
)
from decimath.trig import (
    sincos as sincos,
)
from decimath.trig import (
    tan as tan,
)
