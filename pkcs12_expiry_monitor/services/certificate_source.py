"""
PKCS#12证书读取服务
"""
from datetime import datetime, timezone
import logging

from cryptography.hazmat.primitives.serialization import pkcs12

from ..interfaces import CertificateSourceInterface
from .error_handler import ExtractionError, ExtractionErrorHandler


class PKCS12CertificateSource(CertificateSourceInterface):
    """PKCS#12归档证书读取器实现"""

    def __init__(self):
        """初始化PKCS#12证书读取器"""
        self.logger = logging.getLogger(__name__)
        self.error_handler = ExtractionErrorHandler()

    def extract_expiration(self, archive_path: str, passphrase: str) -> datetime:
        """
        读取归档中主证书的过期时间

        Args:
            archive_path: PKCS#12归档路径
            passphrase: 归档口令

        Returns:
            datetime: 过期时间（UTC）

        Raises:
            ExtractionError: 归档无法读取、口令错误或证书缺失
        """
        try:
            archive_data = self._read_archive(archive_path)
            certificate = self._load_certificate(archive_path, archive_data, passphrase)
            expiry_date = self._parse_expiry_date(certificate)
        except Exception as e:
            error = self.error_handler.wrap(archive_path, e)
            self.error_handler.handle_extraction_error(archive_path, error)
            raise error from e

        self.logger.debug(f"归档 {archive_path} 证书过期时间: {expiry_date.isoformat()}")
        return expiry_date

    def _read_archive(self, archive_path: str) -> bytes:
        """
        读取归档内容

        Args:
            archive_path: 归档路径

        Returns:
            bytes: 归档内容
        """
        with open(archive_path, 'rb') as f:
            archive_data = f.read()

        if not archive_data:
            raise ExtractionError(archive_path, "archive is empty")

        return archive_data

    def _load_certificate(self, archive_path: str, archive_data: bytes, passphrase: str):
        """
        解析归档并取出主证书

        Args:
            archive_path: 归档路径
            archive_data: 归档内容
            passphrase: 归档口令

        Returns:
            x509.Certificate: 主证书
        """
        password = passphrase.encode('utf-8') if passphrase else None
        _key, certificate, additional = pkcs12.load_key_and_certificates(archive_data, password)

        if certificate is None:
            raise ExtractionError(
                archive_path,
                f"no certificate found in archive ({len(additional)} additional certificate(s) ignored)"
            )

        return certificate

    def _parse_expiry_date(self, certificate) -> datetime:
        """
        解析证书过期时间

        Args:
            certificate: x509证书

        Returns:
            datetime: 过期时间（UTC）
        """
        not_after = certificate.not_valid_after_utc
        return not_after.astimezone(timezone.utc)
