"""
Figma REST API 讀取

下載檔案 / 指定節點的 JSON，交由 nodes.parse_document 轉成 DesignNode 樹。
"""

import re
from typing import Optional

import requests

_FILE_KEY_RE = re.compile(r"figma\.com/(?:file|design|proto)/([a-zA-Z0-9]+)")


class FigmaAPIError(Exception):
    """Figma API 回應可預期的錯誤（token 無效、檔案不存在）."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def extract_file_key(url_or_key: str) -> str:
    """由 Figma URL 取出 file key；不是 URL 則視為 key 本身."""
    match = _FILE_KEY_RE.search(url_or_key)
    if match:
        return match.group(1)
    return url_or_key.strip()


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str, timeout: float = 30.0):
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def _get(self, url: str, params: dict) -> dict:
        resp = self.session.get(url, params=params, timeout=self.timeout)
        if resp.status_code in (401, 403):
            raise FigmaAPIError("Invalid Figma token. Check your API credentials.", resp.status_code)
        if resp.status_code == 404:
            raise FigmaAPIError("Figma file not found. Check the file key or URL.", resp.status_code)
        resp.raise_for_status()
        return resp.json()

    def get_file(self, file_key: str, node_ids: Optional[list] = None) -> dict:
        url = f"{self.BASE_URL}/files/{file_key}"
        params = {}
        if node_ids:
            params["ids"] = ",".join(node_ids)
        return self._get(url, params)

    def get_file_nodes(self, file_key: str, node_ids: list) -> dict:
        url = f"{self.BASE_URL}/files/{file_key}/nodes"
        params = {"ids": ",".join(node_ids)}
        return self._get(url, params)
