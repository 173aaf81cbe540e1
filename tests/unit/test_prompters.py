"""
卸载选项提示器单元测试
"""

from unittest.mock import patch

import pytest

from sillisetup.uninstall import ChoicePrompter, ConsoleChoicePrompter, UninstallChoice
from sillisetup.utils.paths import AppDataPaths


@pytest.fixture
def paths(tmp_path):
    return AppDataPaths.from_base(tmp_path)


class TestConsoleChoicePrompter:
    """ConsoleChoicePrompter 测试"""

    def test_implements_protocol(self):
        """测试满足提示器接口"""
        assert isinstance(ConsoleChoicePrompter(), ChoicePrompter)

    def test_independent_choices(self, paths):
        """测试两个选项相互独立"""
        with patch("sillisetup.uninstall.choices.Confirm.ask", side_effect=[False, True, True]):
            choice = ConsoleChoicePrompter().prompt_choices(paths)
        assert choice == UninstallChoice(remove_user_data=False, remove_settings=True)

    def test_defaults_unselected(self, paths):
        """测试两个选项默认不勾选"""
        with patch("sillisetup.uninstall.choices.Confirm.ask", side_effect=[False, False, True]) as ask:
            ConsoleChoicePrompter().prompt_choices(paths)
        assert ask.call_args_list[0].kwargs["default"] is False
        assert ask.call_args_list[1].kwargs["default"] is False

    def test_cancel(self, paths):
        """测试最后确认时取消"""
        with patch("sillisetup.uninstall.choices.Confirm.ask", side_effect=[True, True, False]):
            assert ConsoleChoicePrompter().prompt_choices(paths) is None


class TestDialogChoicePrompter:
    """DialogChoicePrompter 测试（不创建真实窗口）"""

    def setup_method(self):
        pytest.importorskip("customtkinter")

    def test_returns_dialog_choice(self, paths):
        """测试返回对话框中的选择"""
        from sillisetup.gui.uninstall_dialog import DialogChoicePrompter

        with patch("sillisetup.gui.uninstall_dialog.UninstallChoiceDialog") as dialog_cls:
            dialog_cls.return_value.get_choice.return_value = UninstallChoice(remove_user_data=True)
            choice = DialogChoicePrompter("SilliReminder").prompt_choices(paths)

        assert choice == UninstallChoice(remove_user_data=True)
        dialog_cls.assert_called_once_with(paths, "SilliReminder")

    def test_closed_dialog_cancels(self, paths):
        """测试关闭窗口视为取消"""
        from sillisetup.gui.uninstall_dialog import DialogChoicePrompter

        with patch("sillisetup.gui.uninstall_dialog.UninstallChoiceDialog") as dialog_cls:
            dialog_cls.return_value.get_choice.return_value = None
            assert DialogChoicePrompter().prompt_choices(paths) is None
