from .states import (
    InitialState,
    TargetState,
    AccLimits,
    JerkLimits,
    KinematicState,
    JerkState
)

from .constant_acc import AccSolver, AccCase, Phase
from .constant_jerk import JerkSolver, JerkCase, JerkPhase
from .angle import AngleSolver

__all__ = [
    "InitialState",
    "TargetState",
    "AccLimits",
    "JerkLimits",
    "KinematicState",
    "JerkState",
    "AccSolver",
    "AccCase",
    "Phase",
    "JerkSolver",
    "JerkCase",
    "JerkPhase",
    "AngleSolver"
]
