# jobai/ai_config.py - AI 配置（个人介绍 + 提示词模板）的增删改查
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from .store import AiRecordStore
from .utils import now, setup_logger

logger = setup_logger(__name__)

DEFAULT_INTRODUCE = (
    "我是天津师范大学的经济学大三学生，具备扎实的经济学理论基础和数据分析能力。"
    "对AI产品和互联网行业充满热情，希望通过实习将经济学理论与产品实践相结合。"
    "我的优势包括：1）熟悉市场分析和用户需求洞察，具备良好的逻辑思维；"
    "2）掌握基础的Python编程和数据处理技能，能进行简单的数据分析；"
    "3）学习能力强，对新技术和产品趋势保持敏感；4）具备良好的沟通表达能力和团队协作精神。"
)

DEFAULT_PROMPT = (
    "请基于以下信息生成简洁友好的中文打招呼语，突出求职者与公司/岗位的匹配度和诚意：\n"
    "个人介绍：%s\n关键词：%s\n职位名称：%s\n职位描述：%s\n参考语：%s\n\n"
    "要求：1）开头直接表达对岗位的兴趣和对公司的认可；"
    "2）突出经济学背景与产品的结合点，强调数据分析和用户需求洞察优势；"
    "3）说明为什么选择这家公司（结合公司业务特点）；4）强调快速学习能力和团队协作精神；"
    "5）体现对行业和公司文化的了解；6）避免套话，真诚自然；7）控制在250字以内。"
)


class AiRecord(BaseModel):
    id: int
    introduce: Optional[str] = None
    prompt: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AiConfigManager:
    """
    管理 ai 表。"最新"记录取 id 最大的一条，作为当前生效的配置。
    """

    def __init__(self, store: AiRecordStore, timezone: str = "Asia/Shanghai"):
        self.store = store
        self.timezone = timezone

    def _now(self) -> str:
        return now(self.timezone).isoformat()

    def get_latest(self) -> AiRecord:
        """获取最新一条配置，不存在则创建默认配置"""
        row = self.store.select_latest()
        if row is None:
            return self.create_default()
        return AiRecord(**row)

    def get_all(self) -> List[AiRecord]:
        return [AiRecord(**r) for r in self.store.select_list()]

    def get_by_id(self, record_id: int) -> Optional[AiRecord]:
        row = self.store.select_by_id(record_id)
        return AiRecord(**row) if row else None

    def save_or_update(self, introduce: str, prompt: str) -> AiRecord:
        """保存或更新 AI 配置（introduce/prompt）"""
        row = self.store.select_latest()
        ts = self._now()

        if row is None:
            row = {"introduce": introduce, "prompt": prompt, "created_at": ts, "updated_at": ts}
            row["id"] = self.store.insert(row)
            logger.info(f"创建新的AI配置，ID: {row['id']}")
        else:
            row.update(introduce=introduce, prompt=prompt, updated_at=ts)
            self.store.update_by_id(row)
            logger.info(f"更新AI配置，ID: {row['id']}")

        return AiRecord(**row)

    def delete_by_id(self, record_id: int) -> bool:
        if self.store.delete_by_id(record_id) > 0:
            logger.info(f"删除AI配置成功，ID: {record_id}")
            return True
        return False

    def create_default(self) -> AiRecord:
        ts = self._now()
        row = {"introduce": DEFAULT_INTRODUCE, "prompt": DEFAULT_PROMPT, "created_at": ts, "updated_at": ts}
        row["id"] = self.store.insert(row)
        logger.info(f"创建默认AI配置，ID: {row['id']}")
        return AiRecord(**row)

    def render_prompt(self, keywords: str, job_name: str, job_description: str,
                      reference: str = "", record: Optional[AiRecord] = None) -> str:
        """用配置中的模板拼出发给 AI 的提示词"""
        record = record or self.get_latest()
        template = record.prompt or DEFAULT_PROMPT
        try:
            return template % (record.introduce or "", keywords, job_name, job_description, reference)
        except (TypeError, ValueError) as e:
            raise ValueError(f"提示词模板需要 5 个 %s 占位符: {e}") from e
