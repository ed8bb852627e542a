import pytest

from agentkit.prompt import ChainedPromptProvider, PromptProvider


class Static(PromptProvider):
    def __init__(self, text):
        self.text = text

    async def system_prompt_for(self, user_input):
        return self.text


class Echo(PromptProvider):
    async def system_prompt_for(self, user_input):
        return f"input={user_input}"


@pytest.mark.asyncio
async def test_empty_chain_yields_empty_string():
    chain = ChainedPromptProvider()
    assert len(chain) == 0
    assert await chain.system_prompt_for("hi") == ""


@pytest.mark.asyncio
async def test_fragments_joined_in_order_with_blank_line():
    chain = ChainedPromptProvider([Static("first"), Static("second")])
    assert await chain.system_prompt_for("x") == "first\n\nsecond"


@pytest.mark.asyncio
async def test_blank_fragments_skipped():
    chain = ChainedPromptProvider()
    chain.push(Static("   \n"))
    chain.push(Static("only"))
    chain.push(Static(""))
    assert len(chain) == 3
    assert await chain.system_prompt_for("x") == "only"


@pytest.mark.asyncio
async def test_input_passed_to_each_provider():
    chain = ChainedPromptProvider([Echo(), Echo()])
    out = await chain.system_prompt_for("q")
    assert out.split("\n\n") == ["input=q", "input=q"]


@pytest.mark.asyncio
async def test_chains_nest():
    inner = ChainedPromptProvider([Static("a"), Static("b")])
    outer = ChainedPromptProvider([inner, Static("c")])
    assert await outer.system_prompt_for("x") == "a\n\nb\n\nc"


def test_prompt_provider_is_abstract():
    with pytest.raises(TypeError):
        PromptProvider()