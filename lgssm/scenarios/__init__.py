"""Simulation scenarios wiring several model roles together."""
from .config import SimulationConfig, SCENARIOS
from .vehicle import (
    acceleration_profile,
    create_velocity_model,
    create_position_velocity_model,
    create_odometry_model,
    run_simulation,
    SimulationResult,
    MODEL_FACTORIES,
)

__all__ = [
    'SimulationConfig',
    'SCENARIOS',
    'acceleration_profile',
    'create_velocity_model',
    'create_position_velocity_model',
    'create_odometry_model',
    'run_simulation',
    'SimulationResult',
    'MODEL_FACTORIES',
]
