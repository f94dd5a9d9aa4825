import argparse
import logging

from config.settings import SourceConfig, WindowConfig, load_log_level, load_source_config
from data.logger import JsonlLogger
from data.task_source import TaskSource
from game.app import GameApp
from game.runtime.paths import app_data_path
from game.runtime.progress_store import ProgressStore
from game.runtime.source_settings import load_source_url
from game.task_manager import Trainer

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mouse practice trainer")
    parser.add_argument("--log-level", default=load_log_level(), help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--tasks-url", default="", help="http(s) URL of the task collection")
    parser.add_argument("--tasks-file", default="", help="local JSON task collection (wins over the URL)")
    return parser.parse_args()


def resolve_tasks_url(source_config: SourceConfig, cli_url: str = "") -> str:
    """Command line beats MOUSE_TRAINER_TASKS_URL, which beats the saved settings."""
    override = (cli_url or "").strip() or source_config.env_url
    return load_source_url(app_data_path("source.json"), source_config.default_url, env_url=override)


def build_trainer(source_config: SourceConfig, tasks_url: str = "", tasks_file: str = "") -> Trainer:
    url = resolve_tasks_url(source_config, tasks_url)
    source = TaskSource(
        url=url,
        local_path=tasks_file or source_config.local_path,
        timeout_sec=source_config.timeout_sec,
    )
    tasks, used_fallback = source.fetch()
    if used_fallback:
        logger.warning("Playing the built-in practice set")
    return Trainer(
        tasks,
        progress=ProgressStore(app_data_path("progress.json")),
        journal=JsonlLogger(str(app_data_path("outcomes.jsonl"))),
    )


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    trainer = build_trainer(load_source_config(), tasks_url=args.tasks_url, tasks_file=args.tasks_file)
    GameApp(WindowConfig(), trainer).run()


if __name__ == "__main__":
    main()
