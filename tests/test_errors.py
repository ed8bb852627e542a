from agentkit.errors import AgentError, ConfigurationError, SkillError


def test_skill_error_message_has_prefix():
    assert str(SkillError("boom")) == "skill: boom"


def test_configuration_error_message_has_prefix():
    assert str(ConfigurationError("bad value")) == "config: bad value"


def test_generic_agent_error_message():
    assert str(AgentError("stopped")) == "agent: stopped"


def test_subclasses_are_caught_as_agent_error():
    err = SkillError("missing file")
    assert isinstance(err, AgentError)
    assert err.detail == "missing file"
    assert str(err) == "skill: missing file"


def test_configuration_error_is_agent_error():
    err = ConfigurationError("x")
    assert isinstance(err, AgentError)
    assert err.detail == "x"
    assert str(err) == "config: x"