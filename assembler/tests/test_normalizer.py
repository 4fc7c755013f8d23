"""Tests for configuration normalization."""

import pytest
from assembler.src.config import Settings
from assembler.src.models.config import GateTrigger, PipelineConfig
from assembler.src.services.config_parser import ConfigurationError
from assembler.src.services.normalizer import normalize_config

BOOTSTRAP = "npm install -g aws-cdk ts-node typescript"

def make_config(**overrides) -> PipelineConfig:
    data = {
        "project_name": "shop",
        "github": {"project_owner": "acme"},
        "stage": {
            "prod_stage_name": "prod",
            "stages": [
                {"name": "dev", "account": "1", "region": "us-east-1"},
                {"name": "prod", "account": "2", "region": "us-east-1"},
            ],
        },
    }
    data.update(overrides)
    return PipelineConfig.model_validate(data)

def test_defaults():
    resolved = normalize_config(make_config(), Settings())
    assert resolved.pipeline_name == "shop-pipeline"
    assert resolved.project_owner == "acme"
    assert resolved.install_commands == [BOOTSTRAP]
    assert resolved.build_commands == []
    assert resolved.token_secret_name == "GITHUB_TOKEN"
    assert resolved.subdirectory == "."
    assert resolved.synth_command == "cdk synth"
    assert resolved.gates == []

def test_install_commands_follow_bootstrap():
    config = make_config(commands={"install_commands": ["npm ci", "pip install -r requirements.txt"]})
    resolved = normalize_config(config, Settings())
    assert resolved.install_commands == [
        BOOTSTRAP,
        "npm ci",
        "pip install -r requirements.txt",
    ]

def test_credential_override():
    config = make_config(github={"project_owner": "acme", "token_in_secret_manager": "shop/github"})
    assert normalize_config(config, Settings()).token_secret_name == "shop/github"

def test_empty_credential_override_uses_default():
    config = make_config(github={"project_owner": "acme", "token_in_secret_manager": ""})
    assert normalize_config(config, Settings()).token_secret_name == "GITHUB_TOKEN"

def test_empty_subdir_is_root():
    assert normalize_config(make_config(subdir=""), Settings()).subdirectory == "."

def test_subdir_override():
    assert normalize_config(make_config(subdir="infra"), Settings()).subdirectory == "infra"

def test_settings_drive_defaults():
    settings = Settings(
        bootstrap_install_command="npm install -g aws-cdk",
        synth_command="npx cdk synth",
        default_token_secret_name="CI_TOKEN",
    )
    resolved = normalize_config(make_config(), settings)
    assert resolved.install_commands == ["npm install -g aws-cdk"]
    assert resolved.synth_command == "npx cdk synth"
    assert resolved.token_secret_name == "CI_TOKEN"

def test_gates_only_for_non_empty_commands():
    config = make_config(commands={
        "before_non_prod_test_commands": ["npm test"],
        "before_prod_test_commands": [],
    })
    resolved = normalize_config(config, Settings())
    assert len(resolved.gates) == 1
    gate = resolved.gate_for(GateTrigger.BEFORE_FIRST_STAGE)
    assert gate.action_name == "tests"
    assert gate.commands == ["npm test"]
    assert resolved.gate_for(GateTrigger.BEFORE_PRODUCTION) is None

def test_production_gate_name():
    config = make_config(commands={"before_prod_test_commands": ["npm run smoke"]})
    gate = normalize_config(config, Settings()).gate_for(GateTrigger.BEFORE_PRODUCTION)
    assert gate.action_name == "beforeProdTests"

def test_input_is_not_mutated():
    config = make_config(commands={"install_commands": ["npm ci"]})
    normalize_config(config, Settings())
    normalize_config(config, Settings())
    assert config.commands.install_commands == ["npm ci"]

def test_empty_stage_list():
    config = make_config(stage={"stages": []})
    with pytest.raises(ConfigurationError, match="at least one stage") as exc_info:
        normalize_config(config, Settings())
    assert exc_info.value.field == "stage.stages"

def test_first_stage_tests_without_stages():
    config = make_config(
        stage={"stages": []},
        commands={"before_non_prod_test_commands": ["npm test"]},
    )
    with pytest.raises(ConfigurationError, match="no stage is declared") as exc_info:
        normalize_config(config, Settings())
    assert exc_info.value.field == "commands.before_non_prod_test_commands"

def test_duplicate_stage_names():
    config = make_config(stage={"stages": [
        {"name": "dev", "account": "1", "region": "us-east-1"},
        {"name": "prod", "account": "2", "region": "us-east-1"},
        {"name": "dev", "account": "3", "region": "eu-west-1"},
    ]})
    with pytest.raises(ConfigurationError, match="Stage 2 duplicates name 'dev' of stage 0") as exc_info:
        normalize_config(config, Settings())
    assert exc_info.value.field == "stage.stages[2].name"

def test_empty_stage_name():
    config = make_config(stage={"stages": [{"name": "", "account": "1", "region": "us-east-1"}]})
    with pytest.raises(ConfigurationError, match="Stage 0 'name'"):
        normalize_config(config, Settings())

def test_unknown_production_stage_is_not_an_error():
    config = make_config(
        stage={
            "prod_stage_name": "staging",
            "stages": [{"name": "dev", "account": "1", "region": "us-east-1"}],
        },
        commands={"before_prod_test_commands": ["npm run smoke"]},
    )
    resolved = normalize_config(config, Settings())
    assert resolved.prod_stage_name == "staging"
