# jobai/main.py - 命令行入口

import argparse
import logging
import sqlite3
import sys

from dotenv import load_dotenv

from .ai_config import AiConfigManager
from .config import AI_KEYS, API_KEY, Config
from .errors import AiServiceError
from .llm_client import LLMClient
from .store import AiRecordStore, SettingsStore
from .utils import set_log_level, setup_logger

logger = setup_logger("jobai.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="OpenAI-compatible AI request adapter")
    parser.add_argument("--db", help="SQLite database path (default: DB_PATH or jobai.db)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="Send a prompt and print the reply")
    ask.add_argument("prompt")

    greet = sub.add_parser("greet", help="Render the stored prompt template for a job and ask the AI")
    greet.add_argument("--keywords", default="")
    greet.add_argument("--job-name", required=True)
    greet.add_argument("--job-description", default="")
    greet.add_argument("--reference", default="")

    settings = sub.add_parser("settings", help="Show or change BASE_URL / API_KEY / MODEL")
    settings_sub = settings.add_subparsers(dest="action", required=True)
    settings_sub.add_parser("show")
    set_cmd = settings_sub.add_parser("set")
    set_cmd.add_argument("key", choices=AI_KEYS)
    set_cmd.add_argument("value")

    ai = sub.add_parser("ai", help="Manage introduce/prompt records")
    ai_sub = ai.add_subparsers(dest="action", required=True)
    ai_sub.add_parser("show")
    ai_sub.add_parser("list")
    save = ai_sub.add_parser("save")
    save.add_argument("--introduce", required=True)
    save.add_argument("--prompt", required=True)
    delete = ai_sub.add_parser("delete")
    delete.add_argument("id", type=int)

    return parser


def _mask(key: str, value):
    if value and key == API_KEY:
        return value[:4] + "****"
    return value if value else "未设置"


def run(args, cfg: Config) -> int:
    db_path = args.db or cfg.db_path
    settings = SettingsStore(db_path)
    seeded = settings.seed(cfg.ai_settings())
    if seeded:
        logger.info(f"🔧 从环境变量写入初始配置: {seeded}")

    manager = AiConfigManager(AiRecordStore(db_path), timezone=cfg.timezone)

    if args.command in ("ask", "greet"):
        client = LLMClient(
            settings,
            timeout=cfg.request_timeout,
            read_timeout=cfg.read_timeout,
            temperature=cfg.temperature,
            timezone=cfg.timezone,
        )
        if args.command == "ask":
            prompt = args.prompt
        else:
            prompt = manager.render_prompt(
                args.keywords, args.job_name, args.job_description, args.reference
            )
        print(client.ask_llm(prompt))

    elif args.command == "settings":
        if args.action == "set":
            settings.set(args.key, args.value)
        for key in AI_KEYS:
            print(f"{key}: {_mask(key, settings.get(key))}")

    elif args.command == "ai":
        if args.action == "show":
            print(manager.get_latest().model_dump_json(indent=2))
        elif args.action == "list":
            for record in manager.get_all():
                print(record.model_dump_json())
        elif args.action == "save":
            print(manager.save_or_update(args.introduce, args.prompt).model_dump_json(indent=2))
        elif args.action == "delete":
            if not manager.delete_by_id(args.id):
                logger.warning(f"AI配置不存在，ID: {args.id}")
                return 1

    return 0


def main(argv=None) -> int:
    """主函数"""
    load_dotenv()
    args = build_parser().parse_args(argv)

    cfg = Config.from_env()

    try:
        set_log_level(logging.DEBUG if args.verbose else cfg.log_level.upper())
        return run(args, cfg)
    except (AiServiceError, ValueError, sqlite3.Error) as e:
        logger.error(f"❌ 运行失败: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
