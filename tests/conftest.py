"""
测试公共夹具
"""
import os
import time
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    NoEncryption,
    pkcs12,
)
from cryptography.x509.oid import NameOID

from pkcs12_expiry_monitor.services.time_resolver import TimeResolver

TEST_PASSPHRASE = "s3cret"


def build_archive(path, not_after: datetime, passphrase: str = TEST_PASSPHRASE) -> str:
    """生成包含自签名证书的PKCS#12归档"""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "test.example")])
    not_after = not_after.astimezone(timezone.utc).replace(microsecond=0)

    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_after - timedelta(days=365))
        .not_valid_after(not_after)
        .sign(key, hashes.SHA256())
    )

    encryption = BestAvailableEncryption(passphrase.encode()) if passphrase else NoEncryption()
    data = pkcs12.serialize_key_and_certificates(b"test", key, certificate, None, encryption)

    with open(path, 'wb') as f:
        f.write(data)

    return str(path)


@pytest.fixture
def make_archive(tmp_path):
    """返回一个按过期时间生成归档的工厂函数"""
    def factory(not_after: datetime, passphrase: str = TEST_PASSPHRASE, name: str = "cert.p12") -> str:
        return build_archive(tmp_path / name, not_after, passphrase)

    return factory


@pytest.fixture
def utc_now():
    return datetime.now(timezone.utc).replace(microsecond=0)


@pytest.fixture
def frozen_now(monkeypatch, utc_now):
    """固定检查时刻为 utc_now，运行跨越零点时日期差不受影响"""
    monkeypatch.setattr(TimeResolver, 'now', lambda self: self.to_local(utc_now))
    return utc_now


@pytest.fixture
def eastern_local_time(monkeypatch):
    """将主机本地时区临时切换为美国东部时间（POSIX规则，不依赖系统时区库）"""
    if not hasattr(time, 'tzset'):
        pytest.skip("time.tzset 不可用")

    monkeypatch.setenv('TZ', 'EST5EDT,M3.2.0,M11.1.0')
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def aws_credentials(monkeypatch):
    """为moto设置假的AWS凭证"""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')
    monkeypatch.delenv('SNS_TOPIC_ARN', raising=False)
    yield os.environ
