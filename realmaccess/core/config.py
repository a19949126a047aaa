"""
Configuration module for the realm access engine.
"""

from dataclasses import dataclass

from ..errors import ConfigurationError
from ..util.config import get_config_value


@dataclass
class AccessConfig:
    """Configuration for access decisions and session resolution"""
    administrator_account_type: str = "administrator"
    realm_type: str = "realm"
    process_type: str = "process"

    # Always act as the authenticated user, ignoring web mode
    global_auth: bool = False
    # Prefer the web (app context) user even without web mode
    user_context_by_default: bool = False

    metrics_enabled: bool = True
    guard_cyclic_trees: bool = True

    @classmethod
    def from_env(cls, prefix: str = "REALMACCESS_") -> "AccessConfig":
        """Create configuration from environment variables"""
        defaults = cls()
        return cls(
            administrator_account_type=get_config_value(
                "administrator_account_type", defaults.administrator_account_type, str, prefix
            ),
            realm_type=get_config_value("realm_type", defaults.realm_type, str, prefix),
            process_type=get_config_value("process_type", defaults.process_type, str, prefix),
            global_auth=get_config_value("global_auth", defaults.global_auth, bool, prefix),
            user_context_by_default=get_config_value(
                "user_context_by_default", defaults.user_context_by_default, bool, prefix
            ),
            metrics_enabled=get_config_value(
                "metrics_enabled", defaults.metrics_enabled, bool, prefix
            ),
            guard_cyclic_trees=get_config_value(
                "guard_cyclic_trees", defaults.guard_cyclic_trees, bool, prefix
            ),
        )

    def validate(self) -> bool:
        """Validate the configuration"""
        if not self.administrator_account_type:
            raise ConfigurationError(
                "administrator_account_type is required", field="administrator_account_type"
            )
        if not self.realm_type:
            raise ConfigurationError("realm_type is required", field="realm_type")
        if not self.process_type:
            raise ConfigurationError("process_type is required", field="process_type")
        return True
