from .analyzer import analyze_for_weights, compute_statistics
from .entropy import (
    EntropyPool,
    RandomOrgClient,
    generate_enhanced,
    record_system_entropy,
    record_user_entropy,
)
from .rng import generate_mechanical, generate_optimized
from .strategies import GenerationResult, generate_balanced

__all__ = [
    "EntropyPool",
    "GenerationResult",
    "RandomOrgClient",
    "analyze_for_weights",
    "compute_statistics",
    "generate_balanced",
    "generate_enhanced",
    "generate_mechanical",
    "generate_optimized",
    "record_system_entropy",
    "record_user_entropy",
]
