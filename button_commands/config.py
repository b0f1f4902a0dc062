"""
Sistema de configuração para plugins.

Permite que plugins tenham configurações persistentes e validadas, gravadas
em JSON com os nomes de propriedade que o operador vê no arquivo.

Exemplo de uso:

    from button_commands.config import PluginConfig, float_field, string_field

    config = PluginConfig(
        version=string_field(default="2.2.0", alias="Version"),
        register_range=float_field(default=10.0, alias="Register Range", min_value=1.0),
    )
    config._bind("ButtonCommands", config_dir="config", current_version="2.2.0")
    print(config.register_range)
"""
from typing import Any, Dict, Optional, Type, Union, Tuple
from dataclasses import dataclass
import logging

from button_commands import __version__
from button_commands.storage import DataFile

logger = logging.getLogger(__name__)

# Configurações gravadas por versões anteriores a esta são descartadas
BASELINE_VERSION = "2.0.0"

VERSION_KEY = "Version"


@dataclass
class ConfigField:
    """Define um campo de configuração."""

    type: Type
    default: Any = None
    description: str = ""
    alias: str = ""  # Nome da propriedade no JSON
    required: bool = False
    min_value: Optional[Union[int, float]] = None
    max_value: Optional[Union[int, float]] = None

    def validate(self, value: Any) -> Tuple[bool, str]:
        """Valida um valor para este campo."""
        if value is None:
            if self.required:
                return False, "Campo obrigatório"
            return True, ""

        # Verificar tipo
        if not isinstance(value, self.type) or (self.type is not bool and isinstance(value, bool)):
            try:
                value = self.type(value)
            except (ValueError, TypeError):
                return False, f"Tipo inválido. Esperado {self.type.__name__}"

        # Verificar range numérico
        if self.type in (int, float):
            if self.min_value is not None and value < self.min_value:
                return False, f"Valor mínimo: {self.min_value}"
            if self.max_value is not None and value > self.max_value:
                return False, f"Valor máximo: {self.max_value}"

        return True, ""

    def coerce(self, value: Any) -> Any:
        """Converte valor para o tipo correto."""
        if value is None:
            return self.default
        try:
            return self.type(value)
        except (ValueError, TypeError):
            return self.default


def parse_version(version: Optional[str]) -> Tuple[int, ...]:
    """
    Converte "2.1.0" em (2, 1, 0).

    Componentes não numéricos contam como 0; None ou vazio vira (0,).
    """
    if not version:
        return (0,)
    parts = []
    for piece in str(version).strip().split("."):
        digits = ""
        for ch in piece:
            if not ch.isdigit():
                break
            digits += ch
        parts.append(int(digits) if digits else 0)
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def compare_versions(a: Optional[str], b: Optional[str]) -> int:
    """Retorna -1, 0 ou 1 comparando versões componente a componente."""
    va, vb = parse_version(a), parse_version(b)
    return (va > vb) - (va < vb)


def migrate(
    old_version: Optional[str],
    record: Dict[str, Any],
    defaults: Dict[str, Any],
    current_version: str = __version__,
    baseline: str = BASELINE_VERSION,
) -> Dict[str, Any]:
    """
    Atualiza um registro de configuração carregado do disco.

    Versões estritamente anteriores ao baseline são trocadas inteiras pelos
    defaults. As demais mantêm seus valores e só recebem a versão atual.

    Returns:
        Novo dicionário (o registro original não é alterado)
    """
    if compare_versions(old_version, baseline) < 0:
        logger.warning(
            f"⚠️ Configuração da versão {old_version or 'desconhecida'} é anterior a "
            f"{baseline}; usando valores padrão"
        )
        upgraded = dict(defaults)
    else:
        upgraded = dict(record)

    upgraded[VERSION_KEY] = current_version
    return upgraded


class PluginConfig:
    """
    Gerenciador de configuração para plugins.

    Uso:
        config = PluginConfig(
            register_range=float_field(default=10.0, alias="Register Range"),
        )
        config._bind("ButtonCommands")
    """

    def __init__(self, **fields: ConfigField):
        self._fields: Dict[str, ConfigField] = fields
        self._values: Dict[str, Any] = {}
        self._extra: Dict[str, Any] = {}
        self._plugin_name: str = "unknown"
        self._file: Optional[DataFile] = None
        self._current_version: str = __version__

        # Inicializar com valores default
        for name, field_def in fields.items():
            self._values[name] = field_def.default

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            return super().__getattribute__(name)
        if name in self._values:
            return self._values[name]
        raise AttributeError(f"Config não tem campo '{name}'")

    def __setattr__(self, name: str, value: Any):
        if name.startswith('_'):
            super().__setattr__(name, value)
            return
        if name in self._fields:
            field_def = self._fields[name]
            valid, error = field_def.validate(value)
            if not valid:
                raise ValueError(f"Config '{name}': {error}")
            self._values[name] = field_def.coerce(value)
            self._save()
        else:
            super().__setattr__(name, value)

    @property
    def path(self) -> Optional[str]:
        return self._file.path if self._file else None

    @property
    def extra(self) -> Dict[str, Any]:
        """Propriedades do arquivo que não são campos conhecidos."""
        return self._extra

    def _key(self, name: str) -> str:
        return self._fields[name].alias or name

    def _bind(self, plugin_name: str, config_dir: str = "config", current_version: str = __version__):
        """Vincula config a um plugin específico e carrega o arquivo."""
        self._plugin_name = plugin_name
        self._current_version = current_version
        self._file = DataFile(plugin_name.replace(" ", ""), config_dir)
        self._load()

    def _load(self):
        """Carrega configuração do arquivo, migrando versões antigas."""
        if not self._file:
            return

        data = self._file.load()
        if data is None:
            logger.info(f"📝 Criando configuração padrão: {self._file.path}")
            self._save()
            return

        upgraded = migrate(
            data.get(VERSION_KEY),
            data,
            self.defaults_dict(),
            current_version=self._current_version,
        )

        known = set()
        for name, field_def in self._fields.items():
            key = self._key(name)
            known.add(key)
            if key not in upgraded:
                continue
            value = upgraded[key]
            valid, error = field_def.validate(value)
            if valid:
                self._values[name] = field_def.coerce(value)
            else:
                logger.warning(f"⚠️ Config '{key}' ignorada: {error}")

        self._extra = {k: v for k, v in upgraded.items() if k not in known}

        if upgraded != data:
            self._save()

    def _save(self):
        """Salva configuração no arquivo."""
        if not self._file:
            return
        self._file.save(self.to_dict())

    def drop_extra(self, key: str):
        """Remove uma propriedade desconhecida e regrava o arquivo."""
        if self._extra.pop(key, None) is not None:
            self._save()

    def defaults_dict(self) -> Dict[str, Any]:
        """Valores default com os nomes do JSON."""
        return {self._key(name): f.default for name, f in self._fields.items()}

    def to_dict(self) -> Dict[str, Any]:
        """Exporta configuração com os nomes do JSON."""
        data = {self._key(name): value for name, value in self._values.items()}
        data.update(self._extra)
        return data


# Helpers para tipos comuns
def string_field(default: str = "", description: str = "", **kwargs) -> ConfigField:
    return ConfigField(str, default=default, description=description, **kwargs)

def float_field(default: float = 0.0, description: str = "", **kwargs) -> ConfigField:
    return ConfigField(float, default=default, description=description, **kwargs)


def button_commands_config() -> PluginConfig:
    """Configuração padrão do plugin Button Commands."""
    return PluginConfig(
        version=string_field(default=__version__, alias=VERSION_KEY,
                             description="Versão que gravou este arquivo"),
        register_range=float_field(default=10.0, alias="Register Range", min_value=1.0, max_value=100.0,
                                   description="Distância máxima do raycast do bc.add"),
        default_cooldown_seconds=float_field(default=60.0, alias="Default Cooldown Seconds", min_value=0.0,
                                             description="Cooldown dos botões recém-registrados"),
    )
