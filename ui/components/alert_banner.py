import customtkinter as ctk


class AlertBanner(ctk.CTkFrame):
    """Colored strip with a message, an optional action button and a close button."""

    def __init__(self, master, message: str, color: str = "#2196F3",
                 action_text: str | None = None, action_cmd=None, **kwargs):
        super().__init__(master, fg_color=color, corner_radius=6, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, text_color="white", anchor="w", padx=10, pady=6
        ).grid(row=0, column=0, sticky="ew")

        buttons = [("✕", 28, self.destroy)]
        if action_text and action_cmd:
            buttons.insert(0, (action_text, 80, self._act(action_cmd)))
        for col, (text, width, cmd) in enumerate(buttons, start=1):
            ctk.CTkButton(
                self, text=text, width=width, height=24,
                fg_color="transparent", border_width=1 if width > 28 else 0,
                border_color="white", hover_color=color,
                text_color="white", command=cmd,
            ).grid(row=0, column=col, padx=(0, 4))

    def _act(self, cmd):
        def run():
            cmd()
            self.destroy()
        return run
