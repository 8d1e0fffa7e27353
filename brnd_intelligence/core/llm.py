import re
from typing import Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from brnd_intelligence.core.config import settings
from brnd_intelligence.core.logger import logger


def extract_json_from_text(text: str) -> str:
    """
    🧹 专用清洗函数：从大模型的回复中提取 JSON (兼容 ```json 代码块和前后废话)
    """
    # 1. 尝试找到第一个 '{' 和最后一个 '}'
    start = text.find('{')
    end = text.rfind('}')

    if start != -1 and end > start:
        return text[start:end + 1]

    # 2. 如果没找到大括号，就把 markdown 符号去掉试试
    text = re.sub(r"^```json\s*", "", text.strip())
    text = re.sub(r"^```\s*", "", text)
    text = re.sub(r"\s*```$", "", text)
    return text.strip()


class LLMClient:
    """
    通用补全客户端：system + user 两段 prompt，支持 JSON mode。
    显式超时，不做自动重试 (失败直接交给调用方处理)。
    """

    def __init__(self, model: str = None, api_key: str = None, base_url: str = None,
                 timeout_s: float = None):
        self.model = model or settings.LLM_MODEL
        self._llm = ChatOpenAI(
            model=self.model,
            api_key=api_key or settings.LLM_API_KEY,
            base_url=base_url or settings.LLM_BASE_URL,
            timeout=timeout_s or settings.LLM_TIMEOUT_S,
            max_retries=0,
        )

    async def complete(self, system: str, prompt: str, temperature: float = 0.0,
                       max_tokens: Optional[int] = None, json_mode: bool = False) -> str:
        kwargs = {"temperature": temperature}
        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        logger.debug(f"🚀 [Send to LLM]: {prompt[:50]}... (Prompt Sent)")
        response = await self._llm.bind(**kwargs).ainvoke(
            [SystemMessage(content=system), HumanMessage(content=prompt)]
        )
        content = response.content if isinstance(response.content, str) else ""
        logger.debug(f"🧠 [LLM Raw Response]: {content[:200]}")
        return content.strip()
