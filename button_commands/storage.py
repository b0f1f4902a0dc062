"""
Arquivos de dados JSON.

Cada plugin guarda seu estado em um arquivo ``<diretório>/<nome>.json``.
A escrita é atômica: o conteúdo vai para um arquivo temporário no mesmo
diretório e depois substitui o original com ``os.replace``.

Exemplo:

    from button_commands.storage import DataFile

    data_file = DataFile("ButtonCommands", directory="data")
    data = data_file.load() or {}
    data["Press Buttons"] = {}
    data_file.save(data)
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

FILE_EXTENSION = ".json"


class StorageError(RuntimeError):
    """Falha ao ler ou gravar um arquivo de dados."""
    pass


class DataFileError(StorageError):
    """Arquivo de dados com JSON ou estrutura inválida."""
    pass


class DataFile:
    """Arquivo JSON nomeado dentro de um diretório de dados."""

    def __init__(self, name: str, directory: str = "data"):
        self.name = name
        self.directory = directory

    @property
    def path(self) -> str:
        return os.path.join(self.directory, f"{self.name}{FILE_EXTENSION}")

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def load(self) -> Optional[Dict[str, Any]]:
        """
        Carrega o arquivo.

        Returns:
            Dicionário com o conteúdo, ou None se o arquivo não existe

        Raises:
            DataFileError: JSON inválido ou raiz que não é objeto
            StorageError: erro de I/O
        """
        if not self.exists():
            return None

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DataFileError(f"JSON inválido em {self.path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Não foi possível ler {self.path}: {e}") from e

        if data is None:
            return None
        if not isinstance(data, dict):
            raise DataFileError(f"{self.path}: raiz deve ser um objeto JSON")
        return data

    def save(self, data: Dict[str, Any]):
        """Grava o arquivo de forma atômica."""
        tmp_path = None
        try:
            os.makedirs(self.directory or ".", exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.name}.", suffix=".tmp", dir=self.directory or "."
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Não foi possível gravar {self.path}: {e}") from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

        logger.debug(f"💾 Arquivo salvo: {self.path}")

    def delete(self) -> bool:
        """Remove o arquivo. Retorna False se ele não existia."""
        if not self.exists():
            return False
        try:
            os.remove(self.path)
        except OSError as e:
            raise StorageError(f"Não foi possível remover {self.path}: {e}") from e
        return True


def list_data_files(directory: str = "data") -> List[str]:
    """Lista os nomes (sem extensão) dos arquivos de dados de um diretório."""
    if not os.path.isdir(directory):
        return []
    return sorted(
        entry[:-len(FILE_EXTENSION)]
        for entry in os.listdir(directory)
        if entry.endswith(FILE_EXTENSION)
    )
