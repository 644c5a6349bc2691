"""
Password generation entry points.
"""

import logging
from typing import Any, Dict, Mapping, NamedTuple, Optional, Union

from .pool import (
    ActiveSetConfiguration,
    GenerationOptions,
    describe_configuration,
    prepare_active_sets,
    validate_configuration,
)
from .sampling import sample
from ..analysis.entropy import calculate_entropy
from ..exceptions import ConfigurationError
from ..utils.random_source import ensure_crypto


logger = logging.getLogger(__name__)

OptionsLike = Union[GenerationOptions, Mapping[str, Any], None]

MASTER_OPTIONS = GenerationOptions(
    length=12,
    upper=True,
    lower=True,
    nums=True,
    symbols=False,
    force_each=True,
    exclude_ambiguous=True,
)


class GenerationResult(NamedTuple):
    """Outcome of one generation call: a password with its entropy, or an error."""

    password: str = ""
    entropy_bits: float = 0.0
    method: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "GenerationResult":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Render as ``{password, entropyBits, method}`` or ``{error}``."""
        if self.error is not None:
            return {"error": self.error}
        return {
            "password": self.password,
            "entropyBits": self.entropy_bits,
            "method": self.method,
        }


def resolve_options(options: OptionsLike = None, **overrides: Any) -> GenerationOptions:
    """Normalize whatever the caller passed into ``GenerationOptions``."""
    if isinstance(options, GenerationOptions):
        opts = options
    else:
        opts = GenerationOptions.from_mapping(options)

    if overrides:
        opts = opts.replace(**overrides)
    return opts


def generate_from_config(config: ActiveSetConfiguration) -> GenerationResult:
    """
    Generate a password for an already resolved configuration.

    Configuration problems come back as ``GenerationResult.error``.
    """
    error = validate_configuration(config)
    if error:
        logger.debug(f"Configuration rejected: {error}")
        return GenerationResult.failure(error)

    chars, method = sample(config)
    entropy = calculate_entropy(
        config.length,
        config.pool_size,
        config.set_sizes,
        config.force_each,
        method,
    )

    logger.debug(
        f"Generated {config.length} chars from {len(config.active_sets)} classes "
        f"via {method} ({entropy:.3f} bits)"
    )
    return GenerationResult(password="".join(chars), entropy_bits=entropy, method=method)


def generate(options: OptionsLike = None, **overrides: Any) -> GenerationResult:
    """
    Generate one password and report its exact entropy.

    Args:
        options: ``GenerationOptions`` or a mapping of option names
        **overrides: Individual options, applied on top of ``options``

    Returns:
        Result with password, entropy and method, or with an error message

    Raises:
        InsecureRandomError: If no secure random source is available
    """
    ensure_crypto()
    config = prepare_active_sets(resolve_options(options, **overrides))
    return generate_from_config(config)


def generate_master_password() -> GenerationResult:
    """
    Password meant to be typed by a person.

    Twelve characters of letters and digits, ambiguous characters removed,
    every class present.
    """
    return generate(MASTER_OPTIONS)


class PasswordGenerator:
    """Generate passwords repeatedly from one fixed configuration."""

    def __init__(self, options: OptionsLike = None, **overrides: Any):
        """
        Initialize password generator with options.

        Args:
            options: ``GenerationOptions`` or a mapping of option names
            **overrides: Individual options (length, upper, lower, nums,
                symbols, force_each, exclude_ambiguous, exclude_code_unsafe)

        Raises:
            ConfigurationError: If the options cannot produce a password
        """
        self.options = resolve_options(options, **overrides)
        self.config = prepare_active_sets(self.options)

        error = validate_configuration(self.config)
        if error:
            raise ConfigurationError(error)

    @property
    def length(self) -> int:
        return self.config.length

    @property
    def charset(self) -> str:
        return self.config.pool

    def generate_result(self) -> GenerationResult:
        """Generate a password with its entropy and method."""
        ensure_crypto()
        return generate_from_config(self.config)

    def generate(self) -> str:
        """
        Generate a secure password.

        Returns:
            Generated password string
        """
        return self.generate_result().password

    def entropy(self, method: str) -> float:
        """Entropy in bits this configuration has under ``method``."""
        return calculate_entropy(
            self.config.length,
            self.config.pool_size,
            self.config.set_sizes,
            self.config.force_each,
            method,
        )

    def get_charset_info(self) -> str:
        """
        Get human-readable description of character set.

        Returns:
            Description of enabled character types
        """
        return describe_configuration(self.config, self.options)


def generate_password(**kwargs: Any) -> str:
    """
    Convenience function to generate a password.

    Args:
        **kwargs: Generation options, see ``GenerationOptions``

    Returns:
        Generated password string

    Raises:
        ConfigurationError: If the options cannot produce a password
    """
    result = generate(**kwargs)
    if not result.ok:
        raise ConfigurationError(result.error)
    return result.password
