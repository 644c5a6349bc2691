"""
Entropass - password generator that reports the exact entropy of what it sampled.
"""

from .generator import GenerationOptions, GenerationResult, generate, generate_password
from .methods import Method

__version__ = "1.0.0"

__all__ = ['GenerationOptions', 'GenerationResult', 'Method', 'generate', 'generate_password']
