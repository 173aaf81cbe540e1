"""GUI 图形界面模块

仅包含卸载选项对话框。需要 customtkinter 与可用的显示环境，由命令行 `uninstall --gui` 按需导入。
"""
