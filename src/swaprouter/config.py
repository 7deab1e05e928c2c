import tomllib
from pathlib import Path

import tomlkit
from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from swaprouter.checksum_cache import get_checksum_address
from swaprouter.logging import logger
from swaprouter.types.aliases import ChainId

CONFIG_DIR = Path.home() / ".config" / "swaprouter"
CONFIG_FILE = CONFIG_DIR / "config.toml"


class PoolDeployment(BaseModel):
    factory: ChecksumAddress
    init_code_hash: str

    @field_validator("factory", mode="before")
    def checksum_factory(cls, factory: str) -> ChecksumAddress:  # noqa: N805
        return get_checksum_address(factory)

    @field_validator("init_code_hash", mode="after")
    def validate_hash(cls, init_code_hash: str) -> str:  # noqa: N805
        if len(HexBytes(init_code_hash)) != 32:  # noqa: PLR2004
            msg = f"Init code hash {init_code_hash} is not 32 bytes."
            raise ValueError(msg)
        return init_code_hash


class AccessTokenDomain(BaseModel):
    name: str = "Ethereum Access Token"
    version: str = "1"


def _default_pool_deployments() -> dict[ChainId, PoolDeployment]:
    return {
        1: PoolDeployment(
            factory=get_checksum_address("0x1F98431c8aD98523631AE4a59f267346ea31F984"),
            init_code_hash="0xe34f199b19b2b4f47f68442619d555527d244f78a3297ea89325f843f87b8b54",
        ),
    }


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SWAPROUTER_", env_nested_delimiter="__")

    default_chain_id: ChainId = 1
    pool_deployments: dict[ChainId, PoolDeployment] = Field(
        default_factory=_default_pool_deployments
    )
    access_token: AccessTokenDomain = AccessTokenDomain()

    def pool_deployment(self, chain_id: ChainId) -> PoolDeployment:
        try:
            return self.pool_deployments[chain_id]
        except KeyError:
            logger.debug(f"No pool deployment configured for chain {chain_id}, using chain 1.")
            return self.pool_deployments.get(1, _default_pool_deployments()[1])


def load_config_from_file(config_path: Path) -> Settings:
    return Settings.model_validate(
        tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(mode="json"),
        ),
    )
    logger.info(f"Saved configuration to {config_path}.")


settings = load_config_from_file(CONFIG_FILE) if CONFIG_FILE.exists() else Settings()
