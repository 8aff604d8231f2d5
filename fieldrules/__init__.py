# Package exports
from fieldrules.config import settings, get_settings
from fieldrules.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    unbind_context,
    builder_logger,
    plugin_logger,
)
from fieldrules.validation import (
    CompositeValidator,
    CrossFieldValidator,
    DictMessageSource,
    LazyLoadingValidatorFactory,
    RulePlugin,
    ValidationBuilder,
    ValidationResult,
    Validator,
    ValidatorPlugin,
)

__version__ = "0.1.0"
