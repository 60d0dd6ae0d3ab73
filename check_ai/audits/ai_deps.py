"""AI Deps - detects AI SDK usage from dependency manifests."""

import json
from pathlib import Path
from typing import Dict, List

from ..core.checks import CheckDefinition, CheckType, CustomResult
from ..core.probe import FileProbe

SECTION = "AI Deps"

# npm package names, matched exactly against dependencies and devDependencies
AI_NPM_PACKAGES = frozenset({
    "openai",
    "@openai/agents",
    "@anthropic-ai/sdk",
    "@anthropic-ai/bedrock-sdk",
    "langchain",
    "@langchain/core",
    "@langchain/openai",
    "@langchain/anthropic",
    "llamaindex",
    "ai",
    "@ai-sdk/openai",
    "@ai-sdk/anthropic",
    "@ai-sdk/google",
    "@google/generative-ai",
    "@google-cloud/vertexai",
    "ollama",
    "ollama-ai-provider",
    "cohere-ai",
    "replicate",
    "huggingface",
    "@huggingface/inference",
    "@modelcontextprotocol/sdk",
    "@modelcontextprotocol/server-stdio",
    "chromadb",
    "pinecone",
    "@pinecone-database/pinecone",
    "weaviate-ts-client",
    "tiktoken",
    "gpt-tokenizer",
    "js-tiktoken",
    "@ai-sdk/azure",
    "@ai-sdk/amazon-bedrock",
    "@ai-sdk/mistral",
    "@ai-sdk/xai",
    "mastra",
    "@mastra/core",
    "@copilotkit/react-core",
    "genkit",
    "@genkit-ai/core",
    "@genkit-ai/ai",
    "ai-jsx",
})

# Python distributions, matched as substrings of requirements.txt / pyproject.toml
AI_PY_PACKAGES = (
    "openai",
    "anthropic",
    "langchain",
    "llama-index",
    "llamaindex",
    "transformers",
    "torch",
    "tensorflow",
    "keras",
    "chromadb",
    "pinecone-client",
    "weaviate-client",
    "crewai",
    "autogen",
    "smolagents",
    "mcp",
    "pydantic-ai",
    "instructor",
    "guidance",
    "dspy",
    "dspy-ai",
    "semantic-kernel",
    "haystack-ai",
    "litellm",
    "letta",
    "agno",
    "google-genai",
    "google-adk",
)

AI_GO_MODULES = (
    "github.com/sashabaranov/go-openai",
    "github.com/tmc/langchaingo",
    "github.com/anthropics/anthropic-sdk-go",
    "github.com/google/generative-ai-go",
)

AI_RUST_CRATES = ("async-openai", "rig-core", "llm-chain", "kalosm", "mistralrs")

CHECKS = [
    CheckDefinition(
        id="ai-deps",
        label="AI SDK dependencies",
        section=SECTION,
        weight=4,
        type=CheckType.CUSTOM,
        custom_key="ai-deps",
        description="Project uses AI SDKs (OpenAI, Anthropic, LangChain, etc.)",
    ),
]


def analyze(root: Path, probe: FileProbe) -> Dict[str, CustomResult]:
    """Collect AI SDK names from every supported manifest."""
    found = []
    found.extend(_npm_dependencies(root, probe))

    for manifest in ("requirements.txt", "pyproject.toml"):
        content = probe.read_text(root / manifest).lower()
        found.extend(pkg for pkg in AI_PY_PACKAGES if content and pkg in content)

    go_mod = probe.read_text(root / "go.mod").lower()
    if go_mod:
        found.extend(
            module.rsplit("/", 1)[-1] for module in AI_GO_MODULES if module.lower() in go_mod
        )

    cargo = probe.read_text(root / "Cargo.toml").lower()
    if cargo:
        found.extend(crate for crate in AI_RUST_CRATES if crate in cargo)

    return {
        "ai-deps": CustomResult(
            found=len(found) > 0,
            matches=found,
            detail=", ".join(found) if found else None,
        )
    }


def _npm_dependencies(root: Path, probe: FileProbe) -> List[str]:
    content = probe.read_text(root / "package.json")
    if not content:
        return []

    try:
        package = json.loads(content)
    except json.JSONDecodeError:
        return []
    if not isinstance(package, dict):
        return []

    deps = {}
    for key in ("dependencies", "devDependencies"):
        if isinstance(package.get(key), dict):
            deps.update(package[key])

    return [name for name in deps if name in AI_NPM_PACKAGES]
