from .log_utils import init_logger
from .math_utils import normalize_angle, sign, solve_quadratic


__all__ = [
    "init_logger",
    "normalize_angle",
    "sign",
    "solve_quadratic"
]
