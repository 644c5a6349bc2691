"""
Constrained password generation.
"""

from .engine import (
    GenerationResult,
    PasswordGenerator,
    generate,
    generate_master_password,
    generate_password,
)
from .pool import ActiveSetConfiguration, GenerationOptions, prepare_active_sets

__all__ = [
    'ActiveSetConfiguration',
    'GenerationOptions',
    'GenerationResult',
    'PasswordGenerator',
    'generate',
    'generate_master_password',
    'generate_password',
    'prepare_active_sets',
]
