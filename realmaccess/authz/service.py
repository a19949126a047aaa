"""
Access service: authorization against the current acting session.

The evaluator and gate take the session explicitly. This service
resolves it from the surrounding application instead: the authenticated
user, the web (app context) user, or the default application. It then
records every decision in the logs and, optionally, in metrics.
"""

import logging
from typing import Any, Callable, List, Mapping, Optional, Union

from ..core.config import AccessConfig
from ..core.types import Session, coerce_session
from ..errors import SessionFormatError
from ..events.events import Event, EventBus, EventType
from ..glossary.glossary import TypeGlossary
from ..metrics.collector import DecisionMetrics, MetricConfig
from .evaluator import ActionEvaluator
from .gate import DELETE, EDIT, VIEW, ItemGate, ItemLike, coerce_item
from .ownership import is_author
from .types import AccessDecision


logger = logging.getLogger(__name__)

SessionLike = Union[Session, Mapping[str, Any], None]
SessionProvider = Callable[[], SessionLike]


class SessionResolver:
    """
    Decides which session is acting.

    Args:
        config: Access configuration
        user_provider: Returns the authenticated user, if any
        web_user_provider: Returns the web (app context) user, if any
        event_bus: Receives APPLICATION_CHANGED events
    """

    def __init__(self, config: Optional[AccessConfig] = None,
                 user_provider: Optional[SessionProvider] = None,
                 web_user_provider: Optional[SessionProvider] = None,
                 event_bus: Optional[EventBus] = None):
        self.config = config or AccessConfig()
        self.user_provider = user_provider
        self.web_user_provider = web_user_provider
        self.event_bus = event_bus or EventBus()
        self._application: Optional[Session] = None

    @property
    def application(self) -> Optional[Session]:
        return self._application

    def set_default_application(self, application: SessionLike) -> None:
        """
        Set the application whose permissions apply when no user is acting.

        A record with a nested ``session`` is unwrapped first.
        """
        self._application = coerce_session(application)
        subject = self._application.id if self._application else ""
        self.event_bus.publish(Event(
            type=EventType.APPLICATION_CHANGED,
            subject=subject or "",
            metadata={"cleared": self._application is None},
        ))

    def _user(self, web_mode: bool) -> Optional[Session]:
        if self.config.global_auth:
            provider = self.user_provider
        elif web_mode or self.config.user_context_by_default:
            provider = self.web_user_provider
        else:
            provider = self.user_provider
        if provider is None:
            return None
        try:
            return coerce_session(provider())
        except SessionFormatError as e:
            logger.warning(f"Malformed session from provider, ignoring it: {e}")
            return None

    def retrieve_current_session(self, web_mode: bool = False) -> Optional[Session]:
        """The acting user, falling back to the default application."""
        user = self._user(web_mode)
        if user is not None:
            return user
        return self._application


class AccessService:
    """
    Authorization checks for whoever is currently acting.

    Every check resolves the session through the resolver, so callers
    never pass it. Unresolvable sessions are denied.
    """

    def __init__(self, config: Optional[AccessConfig] = None,
                 resolver: Optional[SessionResolver] = None,
                 glossary: Optional[TypeGlossary] = None,
                 metrics: Optional[DecisionMetrics] = None):
        self.config = config or AccessConfig()
        self.config.validate()
        self.resolver = resolver or SessionResolver(self.config)
        self.evaluator = ActionEvaluator(self.config, glossary)
        self.gate = ItemGate(self.evaluator)

        if metrics is None and self.config.metrics_enabled:
            metrics = DecisionMetrics(MetricConfig())
        self.metrics = metrics

    @property
    def glossary(self) -> Optional[TypeGlossary]:
        return self.evaluator.glossary

    @glossary.setter
    def glossary(self, glossary: Optional[TypeGlossary]) -> None:
        self.evaluator.glossary = glossary

    def set_default_application(self, application: SessionLike) -> None:
        self.resolver.set_default_application(application)

    def retrieve_current_session(self, web_mode: bool = False) -> Optional[Session]:
        return self.resolver.retrieve_current_session(web_mode)

    def _record(self, operation: str, allowed: bool, detail: str = "") -> bool:
        logger.debug(f"{operation} {detail}: {'allowed' if allowed else 'denied'}")
        if self.metrics is not None:
            self.metrics.record(operation, allowed)
        return allowed

    def is_administrator(self, web_mode: bool = False) -> bool:
        """Whether the acting session bypasses permission checks."""
        return self.evaluator.is_administrator(self.retrieve_current_session(web_mode), web_mode)

    def can(self, action: str, type_name: str, parent_type: Optional[str] = None,
            web_mode: bool = False) -> bool:
        """
        Check whether the acting session may perform an action on a type.

        Example:
            access.can("create", "photo", "image")
            access.can("edit any", "service", "event")
        """
        session = self.retrieve_current_session(web_mode)
        allowed = self.evaluator.can(session, action, type_name, parent_type, web_mode)
        return self._record("can", allowed, f"{action} {type_name}")

    def can_know_of(self, type_name: str, parent_type: Optional[str] = None,
                    web_mode: bool = False) -> bool:
        """Check whether the acting session may know a type exists."""
        session = self.retrieve_current_session(web_mode)
        allowed = self.evaluator.can_know_of(session, type_name, parent_type, web_mode)
        return self._record("can_know_of", allowed, type_name)

    def has(self, permission: str, web_mode: bool = False) -> bool:
        """Check whether the acting session holds a permission anywhere."""
        session = self.retrieve_current_session(web_mode)
        allowed = self.evaluator.has(session, permission, web_mode)
        return self._record("has", allowed, permission)

    def is_author(self, item: ItemLike, web_mode: bool = False) -> bool:
        """Check whether the acting session authored or owns the item."""
        session = self.retrieve_current_session(web_mode)
        return self._record("is_author", is_author(session, coerce_item(item)))

    def explain(self, verb: str, item: ItemLike, web_mode: bool = False) -> AccessDecision:
        """
        Full decision for an item check, including the rule that settled it.

        ``web_mode`` picks the session whose grants are checked. The
        administrator bypass is always judged on the default session.
        """
        session = self.retrieve_current_session(web_mode)
        administrator = self.evaluator.is_administrator(self.retrieve_current_session())
        decision = self.gate.evaluate(session, item, verb, administrator)
        logger.debug(f"{decision.operation} {decision.item_id}: {decision.reason}")
        return decision

    def can_view_item(self, item: ItemLike, web_mode: bool = False) -> bool:
        """Check whether the acting session may view the item."""
        return self._record("view_item", self.explain(VIEW, item, web_mode).allowed)

    def can_edit_item(self, item: ItemLike, web_mode: bool = False) -> bool:
        """Check whether the acting session may edit the item."""
        return self._record("edit_item", self.explain(EDIT, item, web_mode).allowed)

    def can_delete_item(self, item: ItemLike, web_mode: bool = False) -> bool:
        """Check whether the acting session may delete the item."""
        return self._record("delete_item", self.explain(DELETE, item, web_mode).allowed)

    def retrieve_actionable_realms(self, permission: str, web_mode: bool = False) -> List[str]:
        """
        Realm ids the acting session may perform a permission in.

        Example:
            realms = access.retrieve_actionable_realms("create photo")
        """
        session = self.retrieve_current_session(web_mode)
        return sorted(self.evaluator.actionable_realms(session, permission))
