"""
Character classes and the options that select them.
"""

import logging
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple

from ..utils.validation import clamp, parse_length


logger = logging.getLogger(__name__)

# Character sets, reproduced exactly
UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWER = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"
SYMBOLS = "'\"\\!@#$%^&*()_+~`|}{[]:;?><,./-="

# Filters, not classes
AMBIGUOUS = "il1I|Lo0O2Z5S8B"
CODE_UNSAFE = "'\"\\$^*()+~|}{[]?><./"

MIN_LENGTH = 5
MAX_LENGTH = 128

DEFAULT_OPTIONS: Dict[str, Any] = {
    "length": 18,
    "upper": True,
    "lower": True,
    "nums": True,
    "symbols": True,
    "force_each": True,
    "exclude_ambiguous": False,
    "exclude_code_unsafe": False,
}

# Other spellings accepted in option mappings
OPTION_ALIASES = {
    "forceEach": "force_each",
    "excludeAmbiguous": "exclude_ambiguous",
    "excludeCodeUnsafe": "exclude_code_unsafe",
    "ambig": "exclude_ambiguous",
    "unsafe": "exclude_code_unsafe",
}


class GenerationOptions:
    """Options for one generation call, before clamping and filtering."""

    def __init__(self,
                 length: Any = DEFAULT_OPTIONS["length"],
                 upper: bool = True,
                 lower: bool = True,
                 nums: bool = True,
                 symbols: bool = True,
                 force_each: bool = True,
                 exclude_ambiguous: bool = False,
                 exclude_code_unsafe: bool = False):
        """
        Args:
            length: Requested length; clamped to [5, 128] later
            upper: Include uppercase letters
            lower: Include lowercase letters
            nums: Include digits
            symbols: Include symbols
            force_each: Require at least one character from every class
            exclude_ambiguous: Drop visually ambiguous characters from all classes
            exclude_code_unsafe: Drop quoting/escaping characters from symbols
        """
        self.length = length
        self.upper = bool(upper)
        self.lower = bool(lower)
        self.nums = bool(nums)
        self.symbols = bool(symbols)
        self.force_each = bool(force_each)
        self.exclude_ambiguous = bool(exclude_ambiguous)
        self.exclude_code_unsafe = bool(exclude_code_unsafe)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]] = None) -> "GenerationOptions":
        """
        Build options from a dict, filling in defaults.

        Accepts snake_case keys as well as ``forceEach``, ``excludeAmbiguous``,
        ``excludeCodeUnsafe`` and the short ``ambig``/``unsafe`` forms.
        """
        merged = dict(DEFAULT_OPTIONS)
        for key, value in (data or {}).items():
            name = OPTION_ALIASES.get(key, key)
            if name not in DEFAULT_OPTIONS:
                logger.debug(f"Ignoring unknown option: {key}")
                continue
            merged[name] = value
        return cls(**merged)

    def replace(self, **changes: Any) -> "GenerationOptions":
        """Return a copy with some fields changed."""
        data = self.to_dict()
        data.update(changes)
        return GenerationOptions.from_mapping(data)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in DEFAULT_OPTIONS}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenerationOptions):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"GenerationOptions({fields})"


class ActiveSetConfiguration(NamedTuple):
    """Resolved configuration: clamped length and the non-empty classes in use."""

    length: int
    active_sets: Tuple[str, ...]
    force_each: bool
    requested_length: Optional[int] = None

    @property
    def pool(self) -> str:
        return "".join(self.active_sets)

    @property
    def pool_size(self) -> int:
        return sum(len(s) for s in self.active_sets)

    @property
    def set_sizes(self) -> Tuple[int, ...]:
        return tuple(len(s) for s in self.active_sets)


def filter_class(chars: str,
                 exclude_ambiguous: bool = False,
                 exclude_code_unsafe: bool = False) -> str:
    """
    Remove filtered characters from one class, keeping order.

    Args:
        chars: Canonical class string
        exclude_ambiguous: Remove characters in ``AMBIGUOUS``
        exclude_code_unsafe: Remove characters in ``CODE_UNSAFE``; callers
            only pass this for the symbol class

    Returns:
        Filtered class string (possibly empty)
    """
    if exclude_ambiguous:
        chars = "".join(c for c in chars if c not in AMBIGUOUS)
    if exclude_code_unsafe:
        chars = "".join(c for c in chars if c not in CODE_UNSAFE)
    return chars


def prepare_active_sets(options: Optional[GenerationOptions] = None) -> ActiveSetConfiguration:
    """
    Turn options into the ordered list of active classes.

    Classes come in the order upper, lower, digits, symbols. A class emptied
    by filtering is dropped.

    Args:
        options: Generation options (defaults when omitted)

    Returns:
        Resolved configuration; may have no active sets, see
        ``validate_configuration``
    """
    opts = options or GenerationOptions()
    sets = []

    if opts.upper:
        sets.append(filter_class(UPPER, opts.exclude_ambiguous))
    if opts.lower:
        sets.append(filter_class(LOWER, opts.exclude_ambiguous))
    if opts.nums:
        sets.append(filter_class(DIGITS, opts.exclude_ambiguous))
    if opts.symbols:
        sets.append(filter_class(SYMBOLS, opts.exclude_ambiguous, opts.exclude_code_unsafe))

    requested = parse_length(opts.length)

    return ActiveSetConfiguration(
        length=clamp(requested, MIN_LENGTH, MAX_LENGTH),
        active_sets=tuple(s for s in sets if s),
        force_each=opts.force_each,
        requested_length=requested,
    )


def validate_configuration(config: ActiveSetConfiguration) -> Optional[str]:
    """
    Check that a configuration can produce a password.

    Returns:
        Error message, or None when the configuration is usable
    """
    if not config.active_sets:
        return "Select at least one character class"

    # A positive request below the class count is refused even though clamping
    # would lift it; zero and negative requests are simply clamped
    requested = config.requested_length
    if requested is None or requested <= 0:
        requested = config.length
    if config.force_each and requested < len(config.active_sets):
        return f"Length too short (need at least {len(config.active_sets)})"

    return None


def describe_configuration(config: ActiveSetConfiguration,
                           options: Optional[GenerationOptions] = None) -> str:
    """
    Human-readable description of the character pool.

    Args:
        config: Resolved configuration
        options: Options it came from, used to mention exclusions

    Returns:
        Description such as "uppercase, lowercase, digits (excluding ambiguous chars)"
    """
    names = {UPPER: "uppercase", LOWER: "lowercase", DIGITS: "digits", SYMBOLS: "symbols"}
    parts = []

    for chars in config.active_sets:
        for canonical, name in names.items():
            if set(chars) <= set(canonical):
                parts.append(name)
                break

    info = ", ".join(parts) if parts else "nothing"

    if options is not None:
        excluded = []
        if options.exclude_ambiguous:
            excluded.append("ambiguous")
        if options.exclude_code_unsafe and options.symbols:
            excluded.append("code-unsafe")
        if excluded:
            info += f" (excluding {' and '.join(excluded)} chars)"

    return info
