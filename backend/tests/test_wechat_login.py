"""
Tests for the WeChat login endpoint and the jscode2session client.

The HTTP session is replaced with a fake so no request leaves the process.
"""
import pytest
import requests

from planewar.errors import ConfigurationError, UpstreamError, ValidationError
from planewar.services import WeChatAuthService

from conftest import FakeResponse, FakeSession


def test_login_success(client, wechat_session):
    wechat_session.response = FakeResponse({"openid": "o-abc", "session_key": "secret-key", "unionid": "u-1"})
    resp = client.post("/api/wechat/login", json={"code": "js-code"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body == {"success": True, "openid": "o-abc", "unionid": "u-1"}
    assert "session_key" not in body

    call = wechat_session.calls[0]
    assert call["url"] == "https://wechat.invalid/sns/jscode2session"
    assert call["timeout"] == 5
    assert call["params"] == {
        "appid": "wx-test-appid-0001",
        "secret": "test-secret",
        "js_code": "js-code",
        "grant_type": "authorization_code",
    }


def test_login_without_unionid(client, wechat_session):
    wechat_session.response = FakeResponse({"openid": "o-abc", "session_key": "k"})
    body = client.post("/api/wechat/login", json={"code": "c"}).get_json()
    assert body["unionid"] is None


def test_login_missing_code(client, wechat_session):
    resp = client.post("/api/wechat/login", json={})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["success"] is False
    assert body["error"]
    assert wechat_session.calls == []


def test_login_without_body(client):
    resp = client.post("/api/wechat/login")
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_login_upstream_errcode_is_passed_through(client, wechat_session):
    wechat_session.response = FakeResponse({"errcode": 40029, "errmsg": "invalid code"})
    resp = client.post("/api/wechat/login", json={"code": "bad"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["success"] is False
    assert body["errcode"] == 40029
    assert "invalid code" in body["error"]


def test_login_no_openid(client, wechat_session):
    wechat_session.response = FakeResponse({"session_key": "k"})
    resp = client.post("/api/wechat/login", json={"code": "c"})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_login_timeout(client, wechat_session):
    wechat_session.error = requests.Timeout("read timed out")
    resp = client.post("/api/wechat/login", json={"code": "c"})
    assert resp.status_code == 500
    assert resp.get_json()["success"] is False


def test_login_connection_error(client, wechat_session):
    wechat_session.error = requests.ConnectionError("refused")
    resp = client.post("/api/wechat/login", json={"code": "c"})
    assert resp.status_code == 500
    body = resp.get_json()
    assert body["success"] is False
    assert "errcode" not in body


def test_login_unconfigured(client, app, monkeypatch):
    wechat = app.extensions["planewar.wechat"]
    monkeypatch.setattr(wechat, "secret", "")
    resp = client.post("/api/wechat/login", json={"code": "c"})
    assert resp.status_code == 500
    assert resp.get_json()["success"] is False


def test_announcements_work_without_wechat_config(client, app, monkeypatch):
    wechat = app.extensions["planewar.wechat"]
    monkeypatch.setattr(wechat, "appid", "")
    assert client.get("/api/announcements").status_code == 200


class TestWeChatAuthService:
    def _service(self, session, appid="wx-appid", secret="s3cret"):
        return WeChatAuthService(appid=appid, secret=secret, api_url="https://wechat.invalid/x", session=session)

    def test_missing_code(self):
        with pytest.raises(ValidationError):
            self._service(FakeSession()).exchange_code("")

    @pytest.mark.parametrize("appid,secret", [("", "s"), ("wx", ""), ("your-appid", "s"), ("wx", "your-secret")])
    def test_unconfigured(self, appid, secret):
        session = FakeSession()
        with pytest.raises(ConfigurationError):
            self._service(session, appid=appid, secret=secret).exchange_code("c")
        assert session.calls == []

    def test_http_error_status(self):
        session = FakeSession(response=FakeResponse({}, status_code=502, exc=requests.HTTPError("502")))
        with pytest.raises(UpstreamError) as info:
            self._service(session).exchange_code("c")
        assert info.value.status_code == 500

    def test_non_json_body(self):
        session = FakeSession(response=FakeResponse(ValueError("not json")))
        with pytest.raises(UpstreamError) as info:
            self._service(session).exchange_code("c")
        assert info.value.status_code == 500

    def test_errcode_zero_is_success(self):
        session = FakeSession(response=FakeResponse({"errcode": 0, "openid": "o", "session_key": "k"}))
        assert self._service(session).exchange_code("c") == {"openid": "o", "unionid": None}

    def test_timeout_is_upstream_error(self):
        session = FakeSession(error=requests.Timeout())
        with pytest.raises(UpstreamError) as info:
            self._service(session).exchange_code("c")
        assert info.value.status_code == 500
        assert info.value.errcode is None

    def test_masked_appid(self):
        assert self._service(FakeSession(), appid="wx1116882ff98d8f09").masked_appid() == "wx1116882f..."
        assert self._service(FakeSession(), appid="wxshort").masked_appid() == "wxshort"
        assert self._service(FakeSession(), appid="").masked_appid() == "not configured"
