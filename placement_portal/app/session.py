from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

from ..domain.models import Identity, Role, display_name_from_user
from ..infra.exceptions import PortalException, ValidationError
from ..infra.logging import get_logger
from ..infra.storage import TOKEN_KEY, USER_KEY, LocalStorage

logger = get_logger(__name__)

AVATAR_SERVICE = "https://ui-avatars.com/api/"


def avatar_url_for(name: str) -> str:
    return f"{AVATAR_SERVICE}?name={quote(name, safe='')}&background=random"


class SessionContext:
    """Current authenticated identity, scoped to one UI session.

    Created with :meth:`create`, which restores a previously persisted identity
    from durable storage without any network call. Never makes requests itself:
    the caller authenticates and hands the result to :meth:`login`.
    """

    def __init__(self, storage: LocalStorage, identity: Optional[Identity] = None):
        self._storage = storage
        self._identity = identity
        self._disposed = False

    @classmethod
    def create(cls, storage: LocalStorage) -> "SessionContext":
        return cls(storage, cls._restore(storage))

    @staticmethod
    def _restore(storage: LocalStorage) -> Optional[Identity]:
        raw = storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            identity = Identity.from_dict(json.loads(raw))
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            logger.warning(f"丢弃无法解析的本地身份信息: {e}")
            storage.remove_item(USER_KEY)
            return None
        logger.info(f"已从本地存储恢复会话: {identity.email} ({identity.role.value})")
        return identity

    # ------------------------------------------------------------------

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def role(self) -> Optional[Role]:
        return self._identity.role if self._identity else None

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def login(self, user: Union[Identity, Mapping[str, Any]], token: str) -> Identity:
        """Normalize ``user`` and persist it together with ``token``."""
        self._check_alive()
        if isinstance(user, Identity):
            raw: Mapping[str, Any] = user.to_dict()
        else:
            raw = user
        name = display_name_from_user(raw)
        identity = Identity(
            id=str(raw.get("id") or ""),
            display_name=name,
            email=str(raw.get("email") or ""),
            role=Role.parse(raw.get("role")),
            avatar_url=avatar_url_for(name),
        )
        self._storage.set_item(USER_KEY, json.dumps(identity.to_dict(), ensure_ascii=False))
        self._storage.set_item(TOKEN_KEY, token)
        self._identity = identity
        logger.info(f"登录成功: {identity.email} ({identity.role.value})")
        return identity

    def logout(self) -> None:
        """Forget the identity. The token is removed by the API gateway."""
        self._check_alive()
        if self._identity is not None:
            logger.info(f"退出登录: {self._identity.email}")
        self._identity = None
        self._storage.remove_item(USER_KEY)

    def dispose(self) -> None:
        """Release the in-memory identity; durable storage is left untouched."""
        self._identity = None
        self._disposed = True

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _check_alive(self) -> None:
        if self._disposed:
            raise PortalException("Session context has been disposed", "SESSION_DISPOSED")
