# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""
Approximate math primitives for placing dial dots.

Everything here works on single-precision values and avoids the ``math``
module: the dial only needs pixel-snapped accuracy, and callers should rely
on the documented error bounds rather than on how each function gets there.

None of these functions raise. Out-of-domain arguments are clamped to a
safe value so a bad input can never abort a frame.
"""

import struct

PI = 3.141592653589793
PI_2 = 1.5707963267948966
PI_4 = 0.785398163396
TWO_PI = 2.0 * PI

# tan() clamps to this magnitude when cos() is within TAN_EPSILON of zero.
TAN_LIMIT = 1e6
TAN_EPSILON = 1e-6

FLT_MAX = 3.4028234663852886e38

_INF = float('inf')

_F32 = struct.Struct('<f')
_U32 = struct.Struct('<I')
_I32 = struct.Struct('<i')


def _finite(x: float) -> bool:
    return x == x and x != _INF and x != -_INF


def _narrow(x: float) -> float:
    # struct refuses finite doubles beyond the float32 range
    if x > FLT_MAX:
        return _INF
    if x < -FLT_MAX:
        return -_INF
    return x


def _float_bits(x: float) -> int:
    """Return the IEEE-754 single-precision bit pattern of x."""
    return _U32.unpack(_F32.pack(_narrow(x)))[0]


def _bits_float(bits: int) -> float:
    """Inverse of _float_bits."""
    return _F32.unpack(_U32.pack(bits & 0xFFFFFFFF))[0]


def f32(x: float) -> float:
    """Round a Python float to the nearest single-precision value."""
    return _F32.unpack(_F32.pack(_narrow(x)))[0]


def fabs(x: float) -> float:
    """Absolute value by clearing the sign bit."""
    return _bits_float(_float_bits(x) & 0x7FFFFFFF)


def floor(x: float) -> float:
    """Largest integral value not greater than x (truncate, then correct)."""
    if not _finite(x):
        return x
    i = float(int(x))
    if x >= 0.0 or x == i:
        return i
    return i - 1.0


def rint(x: float) -> float:
    """Round to nearest integer, halves away from zero."""
    if not _finite(x):
        return x
    if x >= 0.0:
        return float(int(x + 0.5))
    return float(int(x - 0.5))


def sqrt(x: float) -> float:
    """Square root with relative error under 0.2%.

    Seeds 1/sqrt(x) with the 0x5f3759df magic constant applied to the
    float32 bit pattern, refines with two Newton-Raphson steps and
    multiplies back by x. Non-positive input returns 0.
    """
    if x <= 0.0:
        return 0.0

    half = x * 0.5
    bits = _I32.unpack(_F32.pack(_narrow(x)))[0]
    z = _F32.unpack(_I32.pack(0x5F3759DF - (bits >> 1)))[0]

    z = z * (1.5 - half * z * z)
    z = z * (1.5 - half * z * z)

    return f32(x * z)


def _reduce_angle(x: float):
    """Fold x into [0, pi/2] and return (reduced, sign)."""
    sign = 1.0

    # Drop whole turns (truncating toward zero, so x stays in (-2pi, 2pi))
    x = x - float(int(x / TWO_PI)) * TWO_PI

    if x < 0.0:
        x = -x
        sign = -1.0

    if x > PI:
        x = TWO_PI - x
        sign = -sign
    if x > PI_2:
        x = PI - x

    return x, sign


def sin(x: float) -> float:
    """Sine via Bhaskara I's rational approximation.

    Max absolute error is about 0.0016 over a full turn.
    """
    if not _finite(x):
        return 0.0
    x, sign = _reduce_angle(x)
    p = x * (PI - x)
    return f32(sign * (16.0 * p) / (5.0 * PI * PI - 4.0 * p))


def cos(x: float) -> float:
    return sin(x + PI_2)


def tan(x: float) -> float:
    """Tangent, clamped to +/-TAN_LIMIT near the poles."""
    s = sin(x)
    c = cos(x)
    if fabs(c) < TAN_EPSILON:
        return TAN_LIMIT if s > 0.0 else -TAN_LIMIT
    return f32(s / c)


def asin(x: float) -> float:
    """Arcsine from a truncated series; 0 outside [-1, 1]."""
    if not fabs(x) <= 1.0:
        return 0.0
    x2 = x * x
    return f32(x * (1.0 + x2 * (0.0833333333 + x2 * (0.0375 + x2 * 0.0208333333))))


def acos(x: float) -> float:
    return f32(PI_2 - asin(x))


def atan(x: float) -> float:
    """Arctangent, piecewise by magnitude.

    |x| >= 1 recurses once through atan(1/x), whose argument is always < 1.
    """
    if x != x:
        return 0.0
    ax = fabs(x)
    if ax < 0.4375:
        x2 = x * x
        return f32(x * (0.99997726 + x2 * (-0.33262347 + x2 * (0.19354346
                   + x2 * (-0.11643287 + x2 * 0.05265332)))))

    if ax < 1.0:
        return f32(x / (1.0 + 0.28 * x * x))

    # 1/x == x here, so the identity would never terminate
    if ax == 1.0:
        return PI_4 if x > 0.0 else -PI_4

    return f32((PI_2 if x > 0.0 else -PI_2) - atan(1.0 / x))
