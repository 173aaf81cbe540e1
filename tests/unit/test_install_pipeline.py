"""
安装管道单元测试

测试安装步骤的顺序与进度范围、指纹不匹配时安装目录不被改动、重复安装、
以及说明文档失败不影响安装结果。
"""

import hashlib
import tempfile

import pytest

from sillisetup.config import InstallConfig
from sillisetup.errors import ExitCode
from sillisetup.install import InstallExecutor, InstallOptions, InstallPipeline, Installer
from sillisetup.install.steps import InstallStep


PRIMARY_URL = "https://example.com/SilliReminder.exe"
DOC_URL = "https://example.com/instructions.pdf"
BODY = b"MZ fake SilliReminder build" * 512
DOC_BODY = b"%PDF-1.7 instructions"


def make_config(tmp_path, **overrides) -> InstallConfig:
    data = {
        "primary_asset_url": PRIMARY_URL,
        "expected_fingerprint": hashlib.sha256(BODY).hexdigest(),
        "secondary_asset_url": DOC_URL,
        "install_root": str(tmp_path / "Programs" / "SilliReminder"),
        "documents_dir": str(tmp_path / "Documents"),
    }
    data.update(overrides)
    return InstallConfig(**data)


@pytest.fixture
def session(make_session, make_response):
    return make_session({
        PRIMARY_URL: make_response(BODY),
        DOC_URL: make_response(DOC_BODY),
    })


class TestInstallPipeline:
    """InstallPipeline 测试"""

    def test_default_steps(self):
        """测试默认步骤顺序"""
        names = [step.name for step in InstallPipeline().get_steps()]
        assert names == [
            "resolve_config",
            "download",
            "install",
            "cleanup_staging",
        ]

    def test_default_pipeline_is_valid(self):
        """测试默认管道进度范围连续且覆盖 0-100"""
        assert InstallPipeline().validate_pipeline() == []

    def test_remove_step_breaks_progress(self):
        """测试移除步骤后进度范围不连续"""
        pipeline = InstallPipeline()
        pipeline.remove_step("download")
        errors = pipeline.validate_pipeline()
        assert any("不连续" in e for e in errors)

    def test_empty_pipeline(self):
        """测试空管道"""
        pipeline = InstallPipeline()
        for step in pipeline.get_steps():
            pipeline.remove_step(step.name)
        assert pipeline.validate_pipeline() == ["安装管道中没有步骤"]

    def test_add_custom_step(self):
        """测试添加自定义步骤"""

        class MarkerStep(InstallStep):
            def __init__(self):
                super().__init__("marker", "标记")

            def get_progress_range(self):
                return (100, 100)

            def execute(self, context):
                context.stats['marked'] = True

        pipeline = InstallPipeline()
        pipeline.add_step(MarkerStep())
        assert pipeline.get_steps()[-1].name == "marker"
        assert any("无效" in e for e in pipeline.validate_pipeline())


class TestInstaller:
    """Installer 端到端测试（不访问网络）"""

    def test_successful_install(self, tmp_path, session):
        """测试完整安装并清理暂存文件"""
        config = make_config(tmp_path)
        staging = tmp_path / "staging"
        progress = []

        result = Installer(session=session).install(
            config,
            InstallOptions(with_secondary=True, locale="en"),
            progress_callback=lambda stage, current, total, msg: progress.append(current),
            staging_dir=staging,
        )

        assert result.success, result.message
        assert result.exit_code == ExitCode.OK
        assert result.installed_path == config.get_exe_path()
        assert config.get_exe_path().read_bytes() == BODY
        assert result.secondary_path == config.get_documents_dir() / config.secondary_asset_file_name
        assert result.secondary_path.read_bytes() == DOC_BODY
        assert result.warnings == []
        assert not staging.exists()
        assert progress[0] == 0 and progress[-1] == 100
        assert progress == sorted(progress)

    def test_without_secondary_no_doc_request(self, tmp_path, session):
        """测试未选择说明文档时不下载"""
        result = Installer(session=session).install(
            make_config(tmp_path), InstallOptions(with_secondary=False), staging_dir=tmp_path / "staging"
        )
        assert result.success
        assert result.secondary_path is None
        assert session.requested == [PRIMARY_URL]

    def test_hash_mismatch_leaves_install_root_untouched(self, tmp_path, session):
        """测试指纹不匹配时安装目录不被创建或修改"""
        config = make_config(tmp_path, expected_fingerprint="AA" * 32)
        staging = tmp_path / "staging"

        result = Installer(session=session).install(config, InstallOptions(), staging_dir=staging)

        assert not result.success
        assert result.exit_code == ExitCode.HASH_MISMATCH
        assert "AA" * 32 in result.message
        assert not config.get_install_root().exists()
        assert not (staging / config.exe_file_name).exists()

    def test_hash_mismatch_keeps_previous_install(self, tmp_path, session):
        """测试指纹不匹配时保留已安装的旧版本"""
        config = make_config(tmp_path, expected_fingerprint="AA" * 32)
        config.get_install_root().mkdir(parents=True)
        config.get_exe_path().write_bytes(b"previous version")

        result = Installer(session=session).install(
            config, InstallOptions(force=True), staging_dir=tmp_path / "staging"
        )

        assert result.exit_code == ExitCode.HASH_MISMATCH
        assert config.get_exe_path().read_bytes() == b"previous version"

    def test_network_failure(self, tmp_path, make_session):
        """测试主程序下载失败"""
        config = make_config(tmp_path)
        result = Installer(session=make_session()).install(
            config, InstallOptions(), staging_dir=tmp_path / "staging"
        )
        assert result.exit_code == ExitCode.NETWORK_FAILURE
        assert not config.get_install_root().exists()

    def test_insecure_secondary_url(self, tmp_path, session):
        """测试说明文档地址不是 https 时在下载前失败"""
        config = make_config(tmp_path, secondary_asset_url="http://example.com/doc.pdf")
        result = Installer(session=session).install(
            config, InstallOptions(with_secondary=True, locale="en"), staging_dir=tmp_path / "staging"
        )
        assert result.exit_code == ExitCode.INSECURE_URL
        assert session.requested == []

    def test_reinstall_with_force_overwrites(self, tmp_path, session):
        """测试 force 重复安装直接覆盖"""
        config = make_config(tmp_path)
        installer = Installer(session=session)
        assert installer.install(config, InstallOptions(), staging_dir=tmp_path / "s1").success

        config.get_exe_path().write_bytes(b"tampered")
        asked = []
        result = installer.install(
            config,
            InstallOptions(force=True, confirm_overwrite=lambda path: asked.append(path) or False),
            staging_dir=tmp_path / "s2",
        )

        assert result.success
        assert asked == []
        assert config.get_exe_path().read_bytes() == BODY

    def test_declined_overwrite_cancels(self, tmp_path, session):
        """测试拒绝覆盖时取消且保留旧版本"""
        config = make_config(tmp_path)
        config.get_install_root().mkdir(parents=True)
        config.get_exe_path().write_bytes(b"previous version")

        result = Installer(session=session).install(
            config,
            InstallOptions(confirm_overwrite=lambda path: False),
            staging_dir=tmp_path / "staging",
        )

        assert result.exit_code == ExitCode.CANCELLED
        assert config.get_exe_path().read_bytes() == b"previous version"
        assert session.requested == []

    def test_overwrite_confirmed_before_download(self, tmp_path, session):
        """测试覆盖确认发生在下载之前，确认期间替换暂存文件不影响安装内容"""
        config = make_config(tmp_path)
        config.get_install_root().mkdir(parents=True)
        config.get_exe_path().write_bytes(b"previous version")
        staging = tmp_path / "staging"
        requested_at_confirm = []

        def confirm_and_tamper(path):
            requested_at_confirm.extend(session.requested)
            staging.mkdir(parents=True, exist_ok=True)
            (staging / config.exe_file_name).write_bytes(b"EVIL")
            return True

        result = Installer(session=session).install(
            config, InstallOptions(confirm_overwrite=confirm_and_tamper), staging_dir=staging
        )

        assert result.success, result.message
        assert requested_at_confirm == []
        assert config.get_exe_path().read_bytes() == BODY

    def test_staged_file_swapped_after_verification(self, tmp_path, session, monkeypatch):
        """测试校验后暂存文件被替换时拒绝安装并保留旧版本"""
        config = make_config(tmp_path)
        config.get_install_root().mkdir(parents=True)
        config.get_exe_path().write_bytes(b"previous version")

        original_verify = InstallExecutor.verify_primary

        def verify_then_swap(self, staged_primary):
            result = original_verify(self, staged_primary)
            staged_primary.write_bytes(b"EVIL")
            return result

        monkeypatch.setattr(InstallExecutor, "verify_primary", verify_then_swap)
        result = Installer(session=session).install(
            config, InstallOptions(force=True), staging_dir=tmp_path / "staging"
        )

        assert result.exit_code == ExitCode.HASH_MISMATCH
        assert config.get_exe_path().read_bytes() == b"previous version"
        assert list(config.get_install_root().iterdir()) == [config.get_exe_path()]

    def test_default_staging_dir_is_private_and_removed(self, tmp_path, session, monkeypatch):
        """测试默认暂存目录为每次运行新建，成功后被删除"""
        temp_root = tmp_path / "tmp"
        temp_root.mkdir()
        monkeypatch.setattr(tempfile, "tempdir", str(temp_root))

        result = Installer(session=session).install(make_config(tmp_path), InstallOptions())

        assert result.success, result.message
        assert list(temp_root.iterdir()) == []

    def test_default_staging_dir_removed_on_config_error(self, tmp_path, session, monkeypatch):
        """测试配置错误时不留下空的暂存目录"""
        temp_root = tmp_path / "tmp"
        temp_root.mkdir()
        monkeypatch.setattr(tempfile, "tempdir", str(temp_root))

        result = Installer(session=session).install(
            make_config(tmp_path, expected_fingerprint="xyz"), InstallOptions()
        )

        assert result.exit_code == ExitCode.CONFIG_INVALID
        assert list(temp_root.iterdir()) == []

    def test_secondary_download_failure_is_not_fatal(self, tmp_path, make_session, make_response):
        """测试说明文档下载失败时安装仍然成功"""
        session = make_session({PRIMARY_URL: make_response(BODY)})
        config = make_config(tmp_path)

        result = Installer(session=session).install(
            config, InstallOptions(with_secondary=True, locale="en"), staging_dir=tmp_path / "staging"
        )

        assert result.success
        assert result.secondary_path is None
        assert len(result.warnings) == 1
        assert config.get_exe_path().read_bytes() == BODY

    def test_secondary_delivery_failure_is_not_fatal(self, tmp_path, session):
        """测试说明文档无法保存时安装仍然成功"""
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("x", encoding='utf-8')
        config = make_config(tmp_path, documents_dir=str(blocker / "Documents"))

        result = Installer(session=session).install(
            config, InstallOptions(with_secondary=True, locale="en"), staging_dir=tmp_path / "staging"
        )

        assert result.success
        assert result.secondary_path is None
        assert any("说明文档" in w for w in result.warnings)

    def test_install_root_creation_failure(self, tmp_path, session):
        """测试无法创建安装目录"""
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding='utf-8')
        config = make_config(tmp_path, install_root=str(blocker / "app"))

        result = Installer(session=session).install(config, InstallOptions(), staging_dir=tmp_path / "staging")

        assert result.exit_code == ExitCode.FILESYSTEM_FAILURE

    def test_keep_staging(self, tmp_path, session):
        """测试保留暂存文件"""
        config = make_config(tmp_path)
        staging = tmp_path / "staging"

        result = Installer(session=session).install(config, InstallOptions(keep_staging=True), staging_dir=staging)

        assert result.success
        assert (staging / config.exe_file_name).read_bytes() == BODY
