from typing import Optional

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from backend.app.domain.schema.firmware import FirmwareInfo
from backend.common.exception import errors
from backend.common.object_storage import ObjectNotFoundError, ObjectStorage, ObjectStorageError
from backend.core.conf import settings

_manifest_adapter = TypeAdapter(Optional[list[FirmwareInfo]])


class CRUDFirmwareManifest:
    """固件清单（firmwareInfo.json）读写，每个产品一个 JSON 对象"""

    def __init__(self, storage: ObjectStorage):
        self.storage = storage

    @staticmethod
    def manifest_key(product_name: str) -> str:
        return f'{settings.FIRMWARE_PREFIX}/{product_name}/{settings.FIRMWARE_MANIFEST_NAME}'

    @staticmethod
    def encode(firmware_list: list[FirmwareInfo]) -> bytes:
        try:
            return _manifest_adapter.dump_json(firmware_list, indent=2)
        except PydanticSerializationError as e:
            raise errors.ManifestEncodeError(msg=f'JSON 编码失败: {e}')

    @staticmethod
    def decode(data: bytes) -> list[FirmwareInfo]:
        if not data.strip():
            return []
        try:
            return _manifest_adapter.validate_json(data) or []
        except ValidationError as e:
            raise errors.ManifestDecodeError(msg=f'解析 JSON 文件失败: {e.error_count()} 处错误')

    async def get(self, product_name: str) -> list[FirmwareInfo] | None:
        """读取清单，清单不存在时返回 None"""
        try:
            data = await self.storage.get_object(self.manifest_key(product_name))
        except ObjectNotFoundError:
            return None
        return self.decode(data)

    async def save(self, product_name: str, firmware_list: list[FirmwareInfo]) -> None:
        data = self.encode(firmware_list)
        try:
            await self.storage.put_object(self.manifest_key(product_name), data, content_type='application/json')
        except ObjectStorageError as e:
            raise errors.UploadError(msg=f'上传 JSON 文件失败: {e}')

    async def delete(self, product_name: str) -> None:
        await self.storage.remove_object(self.manifest_key(product_name))
