"""
Local session example

Loads the plugin into an in-memory host, registers the button the admin is
looking at and presses it a couple of times.

Run:
    python examples/local_session.py
"""
from __future__ import annotations

import logging
import tempfile

from button_commands import ADMIN, BasePlayer, ButtonCommandsPlugin, PressButton, Vector3
from button_commands.testing import FakeClock, LocalHost

logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s', datefmt='%H:%M:%S')


def main():
    workdir = tempfile.mkdtemp(prefix="button_commands_demo_")
    clock = FakeClock()

    host = LocalHost(world_size=4000)
    plugin = host.load_plugin(ButtonCommandsPlugin(
        data_dir=f"{workdir}/data", config_dir=f"{workdir}/config", clock=clock,
    ))

    admin = BasePlayer(76561198000000000, "Admin", Vector3(0.0, 10.0, 0.0))
    host.permissions.grant(admin.user_id_string, ADMIN)

    button = PressButton(1337, powered=True)
    host.look_at(admin, button)
    host.run_console_command(admin, "bc.add")

    host.press_button(button, admin)   # runs the three default commands
    clock.advance(10)
    host.press_button(button, admin)   # cooldown: "You must wait 50s ..."

    print(f"chat:   {host.chat_log}")
    print(f"client: {host.client_commands}")
    print(f"server: {host.server_commands}")
    print(f"replies: {host.replies}")
    print(f"data file: {plugin.registry.data_file.path}")


if __name__ == "__main__":
    main()
