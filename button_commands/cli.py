"""
CLI do Button Commands.

Comandos disponíveis:
    button-commands list <arquivo.json>          - Lista os botões registrados
    button-commands show <arquivo.json> <id>     - Mostra o comportamento de um botão
    button-commands validate <arquivo.json>      - Valida o arquivo de dados
"""
import json
import logging
import os
import sys

from button_commands.registry import ButtonRegistry
from button_commands.storage import DataFile, StorageError


def _open_registry(file_path: str) -> ButtonRegistry:
    directory, file_name = os.path.split(os.path.abspath(file_path))
    name, _ = os.path.splitext(file_name)
    registry = ButtonRegistry(DataFile(name, directory))
    if not registry.load():
        raise StorageError(f"Arquivo não encontrado: {file_path}")
    return registry


def list_buttons(file_path: str) -> bool:
    """Lista os botões de um arquivo de dados."""
    try:
        registry = _open_registry(file_path)
    except StorageError as e:
        print(f"❌ {e}")
        return False

    print(f"🔘 {len(registry)} botão(ões) em {os.path.basename(file_path)}")
    for button_id in sorted(registry.ids()):
        behavior = registry.get(button_id)
        flags = []
        if behavior.require_button_powered:
            flags.append("powered")
        if behavior.disable_power_output_on_press:
            flags.append("no-output")
        if behavior.run_random_command:
            flags.append("random")
        if behavior.cooldown_seconds > 0:
            flags.append(f"cooldown={behavior.cooldown_seconds:g}s")
        print(f"   • {button_id}: {len(behavior.commands)} comando(s) [{', '.join(flags) or '-'}]")
    return True


def show_button(file_path: str, button_id: str) -> bool:
    """Mostra o comportamento de um botão."""
    try:
        registry = _open_registry(file_path)
        behavior = registry.get(int(button_id))
    except ValueError:
        print(f"❌ ID inválido: {button_id}")
        return False
    except StorageError as e:
        print(f"❌ {e}")
        return False

    if behavior is None:
        print(f"❌ Botão não registrado: {button_id}")
        return False

    print(json.dumps(behavior.to_dict(), indent=2, ensure_ascii=False))
    return True


def validate_data_file(file_path: str) -> bool:
    """Valida um arquivo de dados."""
    print("=" * 50)
    print(f"📋 Validação: {os.path.basename(file_path)}")
    print("=" * 50)

    try:
        registry = _open_registry(file_path)
    except StorageError as e:
        print(f"\n❌ ERRO: {e}")
        return False

    warnings = []
    for button_id in sorted(registry.ids()):
        behavior = registry.get(button_id)
        if not behavior.commands:
            warnings.append(f"{button_id}: nenhum comando atribuído")
        for index, cmd in enumerate(behavior.commands):
            if not cmd.command.strip():
                warnings.append(f"{button_id}: comando #{index + 1} vazio")

    if warnings:
        print(f"\n⚠️  AVISOS ({len(warnings)}):")
        for warning in warnings:
            print(f"   • {warning}")

    print("")
    print(f"✅ Arquivo válido! ({len(registry)} botão(ões))")
    return True


def show_help():
    """Mostra ajuda."""
    print("""
🔘 Button Commands - ferramentas do arquivo de dados
====================================================

Comandos:
    button-commands list <arquivo.json>        Lista os botões
    button-commands show <arquivo.json> <id>   Mostra um botão
    button-commands validate <arquivo.json>    Valida o arquivo

Exemplos:
    button-commands list data/ButtonCommands.json
    button-commands show data/ButtonCommands.json 123456
""")


def main(argv=None) -> int:
    """Ponto de entrada CLI."""
    argv = list(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.INFO if "--verbose" in argv else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    argv = [a for a in argv if a != "--verbose"]

    if not argv:
        show_help()
        return 0

    command = argv[0].lower()

    if command in ("help", "-h", "--help"):
        show_help()
        return 0

    elif command == "list":
        if len(argv) < 2:
            print("❌ Uso: button-commands list <arquivo.json>")
            return 2
        return 0 if list_buttons(argv[1]) else 1

    elif command == "show":
        if len(argv) < 3:
            print("❌ Uso: button-commands show <arquivo.json> <id>")
            return 2
        return 0 if show_button(argv[1], argv[2]) else 1

    elif command == "validate":
        if len(argv) < 2:
            print("❌ Uso: button-commands validate <arquivo.json>")
            return 2
        return 0 if validate_data_file(argv[1]) else 1

    print(f"❌ Comando desconhecido: {command}")
    show_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
