"""WeChat login - exchanges a mini-game auth code for the player's openid."""
import logging
from typing import Dict, Optional

import requests

from ..config import is_wechat_configured
from ..errors import ConfigurationError, UpstreamError, ValidationError

DEFAULT_API_URL = "https://api.weixin.qq.com/sns/jscode2session"
DEFAULT_TIMEOUT = 5.0  # seconds


class WeChatAuthService:
    """Client for the WeChat ``jscode2session`` identity exchange."""

    def __init__(
        self,
        appid: str,
        secret: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.appid = appid or ""
        self.secret = secret or ""
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return is_wechat_configured(self.appid, self.secret)

    def masked_appid(self) -> str:
        """App id shortened for display, or ``"not configured"``."""
        if not self.appid:
            return "not configured"
        if len(self.appid) > 10:
            return self.appid[:10] + "..."
        return self.appid

    def _validate_config(self) -> None:
        if not self.configured:
            logging.error("WeChat AppID or Secret not configured")
            raise ConfigurationError("Server misconfigured: WeChat AppID or Secret not set")

    def exchange_code(self, code: Optional[str]) -> Dict[str, Optional[str]]:
        """Exchange a client ``code`` for the player's identifiers.

        Args:
            code: Short-lived authorization code from ``wx.login``.

        Returns:
            ``{"openid": ..., "unionid": ...}``. The session key is never
            returned.

        Raises:
            ValidationError: ``code`` is missing.
            ConfigurationError: AppID/Secret are not configured.
            UpstreamError: WeChat reported an error (400) or the request
                failed, timed out, or returned an unreadable body (500).
        """
        if not code:
            raise ValidationError("Missing code parameter")
        self._validate_config()

        params = {
            "appid": self.appid,
            "secret": self.secret,
            "js_code": code,
            "grant_type": "authorization_code",
        }
        try:
            resp = self.session.get(self.api_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.Timeout:
            logging.error("WeChat login request timed out after %ss", self.timeout)
            raise UpstreamError("WeChat server request timed out", status_code=500) from None
        except requests.RequestException as exc:
            logging.error("WeChat login request failed: %s", exc)
            raise UpstreamError(f"WeChat server request failed: {exc}", status_code=500) from exc
        except ValueError as exc:
            logging.error("WeChat login returned a non-JSON body: %s", exc)
            raise UpstreamError("WeChat server returned an invalid response", status_code=500) from exc

        if not isinstance(data, dict):
            raise UpstreamError("WeChat server returned an invalid response", status_code=500)

        errcode = data.get("errcode")
        if errcode:
            errmsg = data.get("errmsg") or "unknown error"
            logging.error("WeChat API error: %s %s", errcode, errmsg)
            raise UpstreamError(f"WeChat API error: {errmsg}", status_code=400, errcode=errcode)

        openid = data.get("openid")
        if not openid:
            raise UpstreamError("No openid returned by WeChat", status_code=400)

        return {"openid": openid, "unionid": data.get("unionid") or None}
