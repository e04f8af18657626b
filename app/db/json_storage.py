"""
JSON 파일 저장소

상품/사용자 컬렉션을 각각 하나의 JSON 배열 파일로 저장합니다.
읽기는 파일 전체를 파싱하고, 쓰기는 컬렉션 전체를 다시 직렬화합니다.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from app.core.config import Settings
from app.core.exceptions import StorageException

logger = logging.getLogger(__name__)

PRODUCTS = "products"
USERS = "users"
RESOURCES = (PRODUCTS, USERS)


class JsonFileStorage:
    """컬렉션 단위로 JSON 파일을 읽고 쓰는 저장소"""

    def __init__(self, settings: Settings):
        self.pretty = settings.is_development
        self._paths = {
            PRODUCTS: settings.products_path,
            USERS: settings.users_path,
        }

    def path_for(self, resource: str) -> Path:
        """
        리소스 이름에 해당하는 파일 경로를 반환합니다.

        Raises:
            ValueError: 알 수 없는 리소스 이름
        """
        try:
            return self._paths[resource]
        except KeyError:
            raise ValueError(f"Unknown resource: {resource}")

    def read(self, resource: str) -> list[dict]:
        """
        파일 전체를 읽어 문서 리스트로 반환합니다.

        Args:
            resource: "products" 또는 "users"

        Returns:
            파싱된 문서 리스트

        Raises:
            StorageException: 파일이 없거나, 읽을 수 없거나, JSON 배열이 아닌 경우
        """
        path = self.path_for(resource)
        try:
            raw = path.read_text(encoding="utf-8")
            documents = json.loads(raw)
        except FileNotFoundError:
            raise StorageException(resource, "read", f"{path} does not exist")
        except OSError as e:
            raise StorageException(resource, "read", str(e))
        except json.JSONDecodeError as e:
            raise StorageException(resource, "read", f"invalid JSON in {path}: {e}")

        if not isinstance(documents, list):
            raise StorageException(
                resource, "read", f"{path} must contain a JSON array"
            )

        logger.debug("Loaded %d %s from %s", len(documents), resource, path)
        return documents

    def write(self, resource: str, documents: list[dict]) -> None:
        """
        컬렉션 전체를 파일에 씁니다.

        같은 디렉터리의 임시 파일에 먼저 쓴 뒤 os.replace 로 교체하므로,
        쓰기 도중 실패해도 기존 파일은 그대로 남습니다.

        Args:
            resource: "products" 또는 "users"
            documents: 저장할 문서 리스트

        Raises:
            StorageException: 직렬화 또는 파일 쓰기 실패
        """
        path = self.path_for(resource)
        try:
            if self.pretty:
                payload = json.dumps(documents, indent=2, ensure_ascii=False)
            else:
                payload = json.dumps(
                    documents, separators=(",", ":"), ensure_ascii=False
                )
        except (TypeError, ValueError) as e:
            raise StorageException(resource, "write", f"not serializable: {e}")

        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageException(resource, "write", str(e))

        logger.debug("Wrote %d %s to %s", len(documents), resource, path)
