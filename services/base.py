"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager
from llm import get_llm_provider
from logger import get_logger

logger = get_logger()


class Services:
    """Container for all application services.

    The LLM provider is constructed once here and shared by every component
    that needs it. Tests inject a database manager and a fake provider.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing.
        llm_provider: Optional LLM provider. If None, one is built from config
            (which may itself be None when LLM features are disabled).
    """

    def __init__(self, config: Config, db_manager=None, llm_provider=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        if llm_provider is None:
            try:
                llm_provider = get_llm_provider(config)
            except ValueError as e:
                # Categorization and chat degrade without a provider
                logger.error(f"Failed to initialize LLM provider: {e}")
                llm_provider = None
        self.llm = llm_provider

        # Lazy import to avoid circular dependencies
        from categorization import TransactionCategorizer
        from services.assistant import AssistantService
        from services.auth import AuthService
        from services.goals import GoalService
        from services.transactions import TransactionService
        from services.users import UserService

        self.categorizer = TransactionCategorizer(
            self.llm, workers=config.categorization_workers
        )
        self.users = UserService(self.db_manager)
        self.transactions = TransactionService(self.db_manager, self.categorizer)
        self.goals = GoalService(self.db_manager)
        self.auth = AuthService(
            self.users, config.jwt_secret, ttl_days=config.token_ttl_days
        )
        self.assistant = AssistantService(
            self.users,
            self.transactions,
            self.goals,
            self.llm,
            transaction_window=config.assistant_transaction_window,
            insights_days=config.assistant_insights_days,
        )
