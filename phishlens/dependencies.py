"""FastAPI dependency injection providers."""

from .config import PhishLensConfig, get_config
from .database import get_session_factory
from .utils.logging import get_logger

_dep_logger = get_logger("dependencies")

_config_instance: PhishLensConfig | None = None
_learning_store = None
_adaptive_learning = None
_blacklist = None
_enhanced_analyzer = None


def get_app_config() -> PhishLensConfig:
    """Get the application config singleton."""
    global _config_instance
    if _config_instance is None:
        _config_instance = get_config()
    return _config_instance


def get_learning_store():
    """Get the key-value store that persists learning state."""
    global _learning_store
    if _learning_store is None:
        from .learning.store import SqlKeyValueStore
        _learning_store = SqlKeyValueStore(get_session_factory(get_app_config()))
    return _learning_store


def get_adaptive_learning():
    """Get the Adaptive Learning context singleton (call ``initialize()`` before use)."""
    global _adaptive_learning
    if _adaptive_learning is None:
        from .learning.adaptive import AdaptiveLearning
        config = get_app_config()
        _adaptive_learning = AdaptiveLearning(
            get_learning_store(),
            max_feedback_entries=config.feedback_log_size,
        )
    return _adaptive_learning


def get_blacklist():
    """Get the configured known-phishing collaborator (None when disabled)."""
    global _blacklist
    if _blacklist is None:
        from .intel.blacklist import build_blacklist
        config = get_app_config()
        _blacklist = build_blacklist(config, get_adaptive_learning())
        _dep_logger.info("blacklist_provider_selected", provider=config.blacklist_provider)
    return _blacklist


def get_enhanced_analyzer():
    """Get the Enhanced Analysis Orchestrator singleton."""
    global _enhanced_analyzer
    if _enhanced_analyzer is None:
        from .orchestrator import EnhancedAnalyzer
        config = get_app_config()
        _enhanced_analyzer = EnhancedAnalyzer(
            get_adaptive_learning(),
            blacklist=get_blacklist(),
            blacklist_timeout=config.blacklist_timeout_seconds,
        )
    return _enhanced_analyzer
