"""
哈希校验单元测试

测试指纹计算、比较规则，以及校验失败后暂存文件被删除。
"""

import hashlib
from pathlib import Path
from unittest.mock import patch

import pytest

from sillisetup.errors import FilesystemError
from sillisetup.install.verifier import (
    FingerprintRecord,
    HashCalculator,
    VerifyOutcome,
    compute_fingerprint,
    verify,
)


@pytest.fixture
def staged_file(tmp_path) -> Path:
    path = tmp_path / "SilliReminder.exe"
    path.write_bytes(b"MZ" + b"\x00" * 4096)
    return path


class TestHashCalculator:
    """HashCalculator 测试"""

    def test_incremental_update(self):
        """测试分段更新与整体计算结果一致"""
        calculator = HashCalculator()
        calculator.update(b"ab")
        calculator.update(b"c")
        assert calculator.hexdigest() == hashlib.sha256(b"abc").hexdigest()

    def test_hash_file_in_chunks(self, tmp_path):
        """测试分块读取与整体读取结果一致"""
        data = bytes(range(256)) * 1000
        path = tmp_path / "data.bin"
        path.write_bytes(data)

        calculator = HashCalculator()
        calculator.update_from_file(path, chunk_size=1000)
        assert calculator.hexdigest() == hashlib.sha256(data).hexdigest()

    def test_unsupported_algorithm(self):
        """测试不支持的算法"""
        with pytest.raises(ValueError):
            HashCalculator("not-a-hash")

    def test_fingerprint_is_uppercase(self, staged_file):
        """测试规范化指纹为大写"""
        fingerprint = compute_fingerprint(staged_file)
        assert fingerprint == fingerprint.upper()
        assert len(fingerprint) == 64


class TestFingerprintRecord:
    """FingerprintRecord 测试"""

    def test_normalized_comparison(self):
        """测试比较时忽略大小写与空白"""
        actual = "AB" * 32
        record = FingerprintRecord.create("ab" * 16 + "\n" + " AB" * 16, actual)
        assert record.expected == actual
        assert record.matches()

    def test_mismatch(self):
        """测试不一致的指纹"""
        assert not FingerprintRecord.create("AA" * 32, "BB" * 32).matches()


class TestVerify:
    """verify 测试"""

    def test_verified_file_kept(self, staged_file):
        """测试校验通过的文件保留"""
        expected = hashlib.sha256(staged_file.read_bytes()).hexdigest().lower()
        result = verify(staged_file, expected)

        assert result.outcome == VerifyOutcome.VERIFIED
        assert result.verified
        assert staged_file.exists()

    def test_mismatch_removes_file(self, staged_file):
        """测试指纹不匹配时删除暂存文件"""
        actual = hashlib.sha256(staged_file.read_bytes()).hexdigest().upper()
        result = verify(staged_file, "AA" * 32)

        assert result.outcome == VerifyOutcome.MISMATCH
        assert result.record.expected == "AA" * 32
        assert result.record.actual == actual
        assert not staged_file.exists()

    def test_missing_file_is_compute_failure(self, tmp_path):
        """测试无法读取的文件"""
        result = verify(tmp_path / "missing.exe", "AA" * 32)
        assert result.outcome == VerifyOutcome.COMPUTE_FAILED
        assert result.error

    def test_unremovable_mismatched_file(self, staged_file):
        """测试无法删除不匹配的文件时报告文件系统错误"""
        with patch.object(Path, "unlink", side_effect=PermissionError(13, "拒绝访问")):
            with pytest.raises(FilesystemError):
                verify(staged_file, "AA" * 32)
