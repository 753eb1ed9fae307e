"""User credentials for the central service and its reply format."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Protocol

log = logging.getLogger(__name__)


@dataclass
class UserCenterMD:
    """Credentials and client details sent with each request to the central service."""

    token: str = ""
    platform: str = ""
    ver: str = ""
    udi: str = ""
    uid: str = ""
    app_id: str = ""
    qid: str = ""

    def headers(self) -> dict[str, str]:
        """Request headers for this user."""
        log.info("UserCenterMD headers md=%s", self)
        return {
            "Authorization": "Bearer " + self.token,
            "platform": self.platform,
            "ver": self.ver,
            "udi": self.udi,
            "uid": self.uid,
            "qid": self.qid,
            "zm-app-id": self.app_id,
            "Content-Type": "application/x-www-form-urlencoded",
        }


@dataclass
class CCAck:
    """Reply of the central service."""

    code: int = 0
    msg: str = ""

    @classmethod
    def from_json(cls, raw: bytes | str) -> "CCAck":
        """Parse a reply body; raises ValueError if it is malformed."""
        text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        obj = json.loads(text)
        if not isinstance(obj, dict):
            raise ValueError("reply must be a JSON object")
        code = obj.get("code", 0)
        msg = obj.get("msg", "")
        if code is None:
            code = 0
        if msg is None:
            msg = ""
        if not isinstance(code, int) or isinstance(code, bool):
            raise ValueError(f"reply code is not an integer: {code!r}")
        if not isinstance(msg, str):
            raise ValueError(f"reply msg is not a string: {msg!r}")
        return cls(code, msg)


class CenterUser(Protocol):
    """What the central service needs to know about a user."""

    def get_open_id(self) -> str:
        """The user's key."""
        ...

    def get_center(self) -> UserCenterMD:
        """The user's central-service credentials."""
        ...