"""Interactive prompts for the workflow.

Blocks on stdin with no timeout. Choices are (value, description) tuples.
"""

import getpass


class Prompter:
    """Terminal prompter backed by input() and getpass."""

    def choose(self, message: str, choices: list[tuple[str, str]], default: int = 1) -> str:
        """Prompt user to select from numbered choices.

        A single choice is returned without reading input.
        """
        if len(choices) == 1:
            value, desc = choices[0]
            print(f"{message}: {desc}")
            return value

        print(f"\n{message}")
        for i, (value, desc) in enumerate(choices, 1):
            marker = "*" if i == default else " "
            print(f"  {marker}{i}. {desc}")

        while True:
            selection = input(f"Select [1-{len(choices)}, default={default}]: ").strip()
            if not selection:
                return choices[default - 1][0]
            try:
                idx = int(selection)
            except ValueError:
                print("Please enter a valid number")
                continue
            if 1 <= idx <= len(choices):
                return choices[idx - 1][0]
            print(f"Please enter a number between 1 and {len(choices)}")

    def password(self, message: str) -> str:
        """Masked single-value input."""
        return getpass.getpass(f"{message}: ").strip()

    def text(self, message: str, default: str = "") -> str:
        """Free-text input with optional default."""
        display = f"{message} [{default}]: " if default else f"{message}: "
        value = input(display).strip()
        return value if value else default
