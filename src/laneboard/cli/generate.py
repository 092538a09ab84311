"""Generate command for creating a default laneboard.yml."""

import logging
from pathlib import Path

import yaml

from ..models import LaneboardConfig
from ..services import ConfigService
from .output import error, info, success

logger = logging.getLogger(__name__)

CONFIG_HEADER = """\
# laneboard configuration
#
# database: SQLite file, relative to this directory (or :memory:)
# copy_suffix: appended to the name of cloned boards, swimlanes, lists, cards
# compact_after_clone: renumber a cloned container's children to 0..n-1
# default_board_name: board created on first start when none exist

"""


def generate_config_yaml() -> str:
    """Render the default LaneboardConfig as commented YAML."""
    config_dict = LaneboardConfig.default().model_dump()
    yaml_content = yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(project_root: Path) -> int:
    """
    Write a default laneboard.yml into project_root.

    Returns:
        Exit code (0 = written, 1 = already exists or not writable)
    """
    config_path = project_root / ConfigService.CONFIG_FILE
    if config_path.exists():
        info(f"Config exists: {config_path}")
        return 1

    try:
        project_root.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_config_yaml())
    except OSError as e:
        logger.warning("Failed to write %s: %s", config_path, e)
        error(f"Cannot write {config_path}: {e}")
        return 1

    success(f"Generated config: {config_path}")
    return 0
