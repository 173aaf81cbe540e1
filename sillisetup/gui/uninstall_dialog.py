"""
卸载选项对话框

两个独立且默认不勾选的复选框（应用数据 / 偏好设置），以及“卸载”和“取消”按钮。
关闭窗口等同于取消。
"""
from typing import Optional

import customtkinter as ctk

from ..uninstall.choices import UninstallChoice
from ..utils.paths import AppDataPaths
from .theme import Colors, Fonts, Style

WIDTH, HEIGHT = 520, 300


class UninstallChoiceDialog(ctk.CTk):
    """卸载选项窗口"""

    def __init__(self, paths: AppDataPaths, app_name: str = "SilliReminder"):
        super().__init__()
        self.paths = paths
        self.choice: Optional[UninstallChoice] = None
        self.title(f"卸载 {app_name}")
        self.resizable(False, False)
        self.configure(fg_color=Colors.BACKGROUND)
        self.protocol("WM_DELETE_WINDOW", self.cancel)

        self.remove_data_var = ctk.BooleanVar(value=False)
        self.remove_settings_var = ctk.BooleanVar(value=False)
        self.setup_ui(app_name)
        self.center_window()

    def center_window(self):
        """窗口居中"""
        self.update_idletasks()
        x = (self.winfo_screenwidth() // 2) - (WIDTH // 2)
        y = (self.winfo_screenheight() // 2) - (HEIGHT // 2)
        self.geometry(f"{WIDTH}x{HEIGHT}+{x}+{y}")

    def setup_ui(self, app_name: str):
        container = ctk.CTkFrame(self, fg_color=Colors.SURFACE, corner_radius=12)
        container.pack(fill='both', expand=True, padx=16, pady=16)

        ctk.CTkLabel(
            container, text=f"卸载 {app_name}", font=Fonts.H1, text_color=Colors.TEXT_PRIMARY
        ).pack(anchor='w', padx=20, pady=(18, 4))
        ctk.CTkLabel(
            container,
            text="程序本身和开机自启动项总会被删除。请选择是否同时删除以下数据：",
            font=Fonts.SMALL,
            text_color=Colors.TEXT_SECONDARY,
            wraplength=WIDTH - 80,
            justify='left',
        ).pack(anchor='w', padx=20, pady=(0, 12))

        ctk.CTkCheckBox(
            container,
            text="删除应用数据（提醒数据库）",
            variable=self.remove_data_var,
            **Style.CHECKBOX,
        ).pack(anchor='w', padx=28, pady=6)
        ctk.CTkCheckBox(
            container,
            text="删除偏好设置",
            variable=self.remove_settings_var,
            **Style.CHECKBOX,
        ).pack(anchor='w', padx=28, pady=6)

        btn_frame = ctk.CTkFrame(container, fg_color='transparent')
        btn_frame.pack(fill='x', side='bottom', pady=16)
        ctk.CTkButton(btn_frame, text="取消", width=110, command=self.cancel, **Style.BUTTON_SECONDARY).pack(side='left', padx=20)
        ctk.CTkButton(btn_frame, text="卸载", width=110, command=self.confirm, **Style.BUTTON_DANGER).pack(side='right', padx=20)

    def confirm(self):
        self.choice = UninstallChoice(
            remove_user_data=bool(self.remove_data_var.get()),
            remove_settings=bool(self.remove_settings_var.get()),
        )
        self.destroy()

    def cancel(self):
        self.choice = None
        self.destroy()

    def get_choice(self) -> Optional[UninstallChoice]:
        """阻塞直到窗口关闭，返回选择；取消时返回 None"""
        self.mainloop()
        return self.choice


class DialogChoicePrompter:
    """以对话框形式收集卸载选项"""

    def __init__(self, app_name: str = "SilliReminder"):
        self.app_name = app_name

    def prompt_choices(self, paths: AppDataPaths) -> Optional[UninstallChoice]:
        return UninstallChoiceDialog(paths, self.app_name).get_choice()
