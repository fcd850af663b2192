import functools
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Set, Union
from uuid import UUID

from pydantic import BaseModel, ValidationError

from app.core.config import APP_NAME, DEFAULT_LOCATION, FALLBACK_USER_NAME
from app.core.errors import (
    AlreadyClosed,
    InvalidInput,
    InvalidRecipient,
    LoadFailure,
    MarketplaceError,
    NotAuthenticated,
    NotFound,
    NotPermitted,
    OutOfRange,
)
from app.db.loader import load_snapshot
from app.db.seed import build_seed
from app.models.base import utcnow
from app.models.conversation import Conversation, Message
from app.models.farm import Farm
from app.models.request import Request, RequestResponse
from app.models.user import User, UserRole
from app.notifications import LoggingNotifier, Notifier, deliver
from app.schemas.request import RequestCreate
from app.schemas.result import CommandResult, Notification, StoreEvent
from app.schemas.user import ProfileUpdate

logger = logging.getLogger("localmeat")

Subscriber = Callable[[StoreEvent], None]


class _Effects:
    """Notifications and events collected while a command runs."""

    def __init__(self) -> None:
        self.notifications: List[Notification] = []
        self.events: List[StoreEvent] = []

    def notify(self, title: str, body: str, recipient_id: Optional[UUID] = None) -> None:
        self.notifications.append(Notification(title=title, body=body, recipient_id=recipient_id))

    def event(self, name: str, entity_id: Optional[UUID] = None) -> None:
        self.events.append(StoreEvent(name=name, entity_id=entity_id))


def _copy(value):
    if isinstance(value, BaseModel):
        return value.model_copy(deep=True)
    if isinstance(value, list):
        return [_copy(item) for item in value]
    return value


def command(method):
    """Run a mutating operation under the store lock and wrap it in a CommandResult.

    Effects are dispatched only after the mutation has committed and the lock
    is released. A MarketplaceError leaves the state untouched and comes back
    as a failed result; so does an entity that fails validation.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        effects = _Effects()
        with self._lock:
            try:
                try:
                    value = method(self, effects, *args, **kwargs)
                except ValidationError as e:
                    raise InvalidInput(f"Invalid input: {e.error_count()} invalid field(s)") from e
            except MarketplaceError as e:
                return CommandResult.failure(e.kind, e.detail)
            result = CommandResult(
                value=_copy(value),
                notifications=effects.notifications,
                events=effects.events,
            )
        self._dispatch(result)
        return result

    return wrapper


def query(method):
    """Read under the store lock and hand back copies, never live entities."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return _copy(method(self, *args, **kwargs))

    return wrapper


class MarketplaceStore:
    """In-memory state of the marketplace.

    Owns users, farms, requests and conversations, plus the session user and
    the farm search/filter state used by the listing screens. Every command
    returns a ``CommandResult``; nothing here raises to the caller.
    """

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        users: Iterable[User] = (),
        farms: Iterable[Farm] = (),
        requests: Iterable[Request] = (),
        conversations: Iterable[Conversation] = (),
    ):
        self._lock = threading.RLock()
        self._notifier = notifier if notifier is not None else LoggingNotifier()
        self._subscribers: List[Subscriber] = []
        self._session_user_id: Optional[UUID] = None
        self._users: List[User] = list(users)
        self._farms: List[Farm] = list(farms)
        self._requests: List[Request] = list(requests)
        self._conversations: List[Conversation] = list(conversations)
        self._search_text = ""
        self._selected_farm_filters: Set[str] = set()

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------
    def load_data(self, resource_dir: Optional[Path] = None) -> bool:
        """Install bundled data, or the seed dataset when loading fails.

        Returns True when the bundled resources were used.
        """
        loaded = False
        with self._lock:
            conversations: List[Conversation] = []
            if resource_dir is not None:
                try:
                    users, farms, requests = load_snapshot(resource_dir)
                    loaded = True
                except LoadFailure as e:
                    logger.warning("Bulk load failed, using built-in data: %s", e.detail)
            if not loaded:
                users, farms, requests, conversations = build_seed()

            self._users = list(users)
            self._farms = list(farms)
            self._requests = list(requests)
            self._conversations = list(conversations)

            # Default session for single-user prototype mode
            first_consumer = next((u for u in self._users if u.role == UserRole.CONSUMER), None)
            self._session_user_id = first_consumer.id if first_consumer else None
            logger.info(
                "Marketplace ready: %d users, %d farms, %d requests, %d conversations",
                len(self._users), len(self._farms), len(self._requests), len(self._conversations),
            )
        return loaded

    # ------------------------------------------------------------------
    # Subscriptions and effect dispatch
    # ------------------------------------------------------------------
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _dispatch(self, result: CommandResult) -> None:
        deliver(self._notifier, result.notifications)
        with self._lock:
            subscribers = list(self._subscribers)
        for event in result.events:
            for callback in subscribers:
                try:
                    callback(event)
                except Exception as e:
                    logger.warning("Subscriber failed on %s: %s", event.name, e)

    # ------------------------------------------------------------------
    # Internal lookups (caller holds the lock)
    # ------------------------------------------------------------------
    def _find_user(self, user_id: UUID) -> Optional[User]:
        return next((u for u in self._users if u.id == user_id), None)

    def _find_request(self, request_id: UUID) -> Request:
        request = next((r for r in self._requests if r.id == request_id), None)
        if request is None:
            raise NotFound(f"Request {request_id} not found")
        return request

    def _find_conversation(self, user_a: UUID, user_b: UUID) -> Optional[Conversation]:
        return next((c for c in self._conversations if c.connects(user_a, user_b)), None)

    def _require_session(self) -> User:
        user = self._find_user(self._session_user_id) if self._session_user_id else None
        if user is None:
            raise NotAuthenticated()
        return user

    @staticmethod
    def _next_timestamp(conversation: Conversation) -> datetime:
        now = utcnow()
        if conversation.messages and conversation.messages[-1].timestamp > now:
            return conversation.messages[-1].timestamp
        return now

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    @command
    def login(self, fx: _Effects, email: str, role: Union[UserRole, str]) -> User:
        try:
            role = UserRole(role)
        except ValueError:
            raise InvalidInput(f"Unknown role: {role!r}")
        wanted = email.lower()
        user = next(
            (u for u in self._users if u.email.lower() == wanted and u.role == role),
            None,
        )
        if user is not None:
            self._session_user_id = user.id
            fx.notify("Welcome Back!", f"Hello {user.name}, welcome back to {APP_NAME}!", user.id)
            fx.event("user_logged_in", user.id)
            return user

        # Unknown (email, role): provision a new account
        user = User(
            email=email,
            name=email.split("@")[0] or FALLBACK_USER_NAME,
            role=role,
            location=DEFAULT_LOCATION,
        )
        self._users.append(user)
        self._session_user_id = user.id
        fx.notify(f"Welcome to {APP_NAME}!", "Thank you for joining our platform!", user.id)
        fx.event("user_created", user.id)
        return user

    @command
    def logout(self, fx: _Effects) -> None:
        user_id = self._session_user_id
        self._session_user_id = None
        fx.event("user_logged_out", user_id)

    @command
    def update_profile(self, fx: _Effects, update: ProfileUpdate) -> User:
        user = self._require_session()
        update_data = update.model_dump(exclude_unset=True, exclude_none=True)
        # Validate the whole record before assigning any field
        User.model_validate({**user.model_dump(), **update_data})
        for field in update_data:
            setattr(user, field, update_data[field])
        fx.event("profile_updated", user.id)
        return user

    # ------------------------------------------------------------------
    # Request lifecycle
    # ------------------------------------------------------------------
    @command
    def post_request(self, fx: _Effects, draft: RequestCreate) -> Request:
        user = self._require_session()
        request = Request(
            consumer_id=user.id,
            consumer_name=user.name,
            **draft.model_dump(),
        )
        self._requests.append(request)
        fx.notify(
            "Request Posted",
            f"Your request for {request.meat_type} has been posted successfully!",
            user.id,
        )
        fx.event("request_posted", request.id)
        return request

    @command
    def respond_to_request(
        self,
        fx: _Effects,
        request_id: UUID,
        farmer_id: UUID,
        farmer_name: str,
        offer_amount: float,
        message: str,
    ) -> Request:
        request = self._find_request(request_id)
        response = RequestResponse(
            farmer_id=farmer_id,
            farmer_name=farmer_name,
            offer_amount=offer_amount,
            message=message,
        )
        request.responses.append(response)

        consumer = self._find_user(request.consumer_id)
        if consumer is not None:
            fx.notify(
                "New Offer on Your Request",
                f"{farmer_name} has made an offer on your {request.meat_type} request!",
                consumer.id,
            )
        fx.event("response_added", request.id)
        return request

    @command
    def accept_request(
        self,
        fx: _Effects,
        request_id: UUID,
        response_index: int,
        as_session_owner: bool = False,
    ) -> Request:
        """Close a request on one of its offers.

        With ``as_session_owner`` the session user must be the consumer who
        posted the request, checked under the same lock as the acceptance.
        """
        request = self._find_request(request_id)
        if as_session_owner and self._require_session().id != request.consumer_id:
            raise NotPermitted("Only the consumer who posted the request can accept an offer")
        if not 0 <= response_index < len(request.responses):
            raise OutOfRange(
                f"Response index {response_index} out of range for {len(request.responses)} response(s)"
            )
        if not request.is_open:
            raise AlreadyClosed(f"Request {request_id} has already been accepted")

        request.is_open = False
        response = request.responses[response_index]
        fx.event("request_accepted", request.id)

        farmer = self._find_user(response.farmer_id)
        if farmer is not None:
            fx.notify(
                "Request Accepted!",
                f"Your offer on the {request.meat_type} request has been accepted!",
                farmer.id,
            )

        farmer_id, consumer_id = response.farmer_id, request.consumer_id
        if farmer_id != consumer_id and self._find_conversation(farmer_id, consumer_id) is None:
            opening = Message(
                sender_id=consumer_id,
                receiver_id=farmer_id,
                content=(
                    f"I've accepted your offer on my {request.meat_type} request. "
                    "Let's discuss the details."
                ),
            )
            conversation = Conversation(
                participants=[farmer_id, consumer_id],
                messages=[opening],
                last_message_timestamp=opening.timestamp,
            )
            self._conversations.append(conversation)
            fx.event("conversation_created", conversation.id)
        return request

    @query
    def conversation_exists(self, user_a: UUID, user_b: UUID) -> bool:
        return self._find_conversation(user_a, user_b) is not None

    # ------------------------------------------------------------------
    # Messaging
    # ------------------------------------------------------------------
    @command
    def send_message(self, fx: _Effects, receiver_id: UUID, content: str) -> Conversation:
        sender = self._require_session()
        if receiver_id == sender.id:
            raise InvalidRecipient("Cannot send a message to yourself")

        receiver = self._find_user(receiver_id)
        conversation = self._find_conversation(sender.id, receiver_id)
        if conversation is not None:
            message = Message(
                sender_id=sender.id,
                receiver_id=receiver_id,
                content=content,
                timestamp=self._next_timestamp(conversation),
            )
            conversation.messages.append(message)
            conversation.last_message_timestamp = message.timestamp
            if receiver is not None:
                fx.notify("New Message", f"You have a new message from {sender.name}", receiver.id)
            fx.event("message_sent", conversation.id)
            return conversation

        message = Message(sender_id=sender.id, receiver_id=receiver_id, content=content)
        conversation = Conversation(
            participants=[sender.id, receiver_id],
            messages=[message],
            last_message_timestamp=message.timestamp,
        )
        self._conversations.append(conversation)
        if receiver is not None:
            fx.notify(
                "New Conversation",
                f"{sender.name} has started a conversation with you",
                receiver.id,
            )
        fx.event("conversation_created", conversation.id)
        return conversation

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @query
    def current_user(self) -> Optional[User]:
        return self._find_user(self._session_user_id) if self._session_user_id else None

    @query
    def list_users(self) -> List[User]:
        return list(self._users)

    @query
    def get_user(self, user_id: UUID) -> Optional[User]:
        return self._find_user(user_id)

    @query
    def get_farm(self, farm_id: UUID) -> Optional[Farm]:
        return next((f for f in self._farms if f.id == farm_id), None)

    @query
    def get_request(self, request_id: UUID) -> Optional[Request]:
        return next((r for r in self._requests if r.id == request_id), None)

    @query
    def filtered_farms(
        self,
        search_text: Optional[str] = None,
        type_filters: Optional[Iterable[str]] = None,
    ) -> List[Farm]:
        """Farms matching the search text and meat-type filters.

        Text matches name, location or any offering type (case-insensitive
        substring). Type filters require at least one offering of a selected
        type. Both must hold when both are given. ``None`` falls back to the
        stored search/filter state.
        """
        if search_text is None:
            search_text = self._search_text
        filters = set(self._selected_farm_filters if type_filters is None else type_filters)

        farms = self._farms
        if search_text:
            farms = [f for f in farms if f.matches_text(search_text)]
        if filters:
            farms = [f for f in farms if f.offers_type(filters)]
        return list(farms)

    @query
    def all_meat_types(self) -> List[str]:
        return sorted({o.type for f in self._farms for o in f.meat_offerings})

    @query
    def open_requests(self) -> List[Request]:
        return [r for r in self._requests if r.is_open]

    @query
    def my_requests(self) -> List[Request]:
        if self._session_user_id is None:
            return []
        return [r for r in self._requests if r.consumer_id == self._session_user_id]

    @query
    def my_farm(self) -> Optional[Farm]:
        if self._session_user_id is None:
            return None
        return next((f for f in self._farms if f.owner_id == self._session_user_id), None)

    @query
    def conversations_for_current_user(self) -> List[Conversation]:
        if self._session_user_id is None:
            return []
        return [c for c in self._conversations if self._session_user_id in c.participants]

    @query
    def conversation_partner(self, conversation_id: UUID) -> Optional[User]:
        """The session user's counterpart in a conversation, if known."""
        if self._session_user_id is None:
            return None
        conversation = next((c for c in self._conversations if c.id == conversation_id), None)
        if conversation is None:
            return None
        other_id = conversation.other_participant(self._session_user_id)
        return self._find_user(other_id) if other_id else None

    # ------------------------------------------------------------------
    # Search / filter state shared with the listing screens
    # ------------------------------------------------------------------
    @property
    def search_text(self) -> str:
        with self._lock:
            return self._search_text

    @search_text.setter
    def search_text(self, value: str) -> None:
        with self._lock:
            self._search_text = value or ""

    @property
    def selected_farm_filters(self) -> Set[str]:
        with self._lock:
            return set(self._selected_farm_filters)

    @selected_farm_filters.setter
    def selected_farm_filters(self, value: Iterable[str]) -> None:
        with self._lock:
            self._selected_farm_filters = set(value)

    def toggle_farm_filter(self, meat_type: str) -> Set[str]:
        with self._lock:
            if meat_type in self._selected_farm_filters:
                self._selected_farm_filters.discard(meat_type)
            else:
                self._selected_farm_filters.add(meat_type)
            return set(self._selected_farm_filters)

    def clear_farm_filters(self) -> None:
        with self._lock:
            self._selected_farm_filters.clear()
