from __future__ import annotations

import pytest

from simgen.agent.generator import generate_candidate
from simgen.agent.refiner import refine_candidate
from simgen.agent.state import ArtifactKind
from simgen.errors import ProviderError
from simgen.prompts import COMMAND_LIST_SYSTEM_PROMPT, COMPONENT_SYSTEM_PROMPT

IMAGE = "data:image/png;base64,iVBORw0KGgo="


def test_generator_sends_request_and_plan_and_extracts(scripted, counter_component):
    provider = scripted(generator=[f"```jsx\n{counter_component}\n```"])
    candidate = generate_candidate(
        "a counter", ArtifactKind.COMPONENT_SOURCE, ["Button", "State"], provider
    )

    assert candidate == counter_component
    call = provider.calls_for("generator")[0]
    assert call.system_prompt == COMPONENT_SYSTEM_PROMPT
    assert call.user_content.startswith("a counter")
    assert "Implementation plan:\n1. Button\n2. State" in call.user_content
    assert call.options.temperature == pytest.approx(0.7)


def test_generator_omits_plan_section_when_plan_is_empty(scripted):
    provider = scripted(generator=['{"commands": []}'])
    generate_candidate("a line", ArtifactKind.COMMAND_LIST, [], provider, temperature=0.2)

    call = provider.calls_for("generator")[0]
    assert call.system_prompt == COMMAND_LIST_SYSTEM_PROMPT
    assert call.user_content == "a line"
    assert call.options.temperature == pytest.approx(0.2)


def test_generator_forwards_images_to_vision_providers(scripted, counter_component):
    provider = scripted(generator=[counter_component], supports_vision=True)
    generate_candidate("copy this", ArtifactKind.COMPONENT_SOURCE, [], provider, images=[IMAGE])

    call = provider.calls_for("generator")[0]
    assert call.options.images == (IMAGE,)
    assert "1 image(s) attached" in call.user_content


def test_generator_drops_images_for_text_only_providers(scripted, counter_component, caplog):
    provider = scripted(generator=[counter_component])
    with caplog.at_level("WARNING"):
        generate_candidate("copy this", ArtifactKind.COMPONENT_SOURCE, [], provider, images=[IMAGE])

    call = provider.calls_for("generator")[0]
    assert call.options.images == ()
    assert "image(s) attached" not in call.user_content
    assert "no vision support" in caplog.text


def test_generator_propagates_provider_errors(scripted, provider_error):
    provider = scripted(generator=[provider_error])
    with pytest.raises(ProviderError):
        generate_candidate("a counter", ArtifactKind.COMPONENT_SOURCE, [], provider)


def test_refiner_lists_defects_and_uses_lower_temperature(scripted, counter_component):
    provider = scripted(refiner=[counter_component + "\n\nI fixed the missing brace for you."])
    candidate = refine_candidate(
        "export default function Counter() {",
        ["Unclosed delimiters: expected }", "Component must contain a return statement that renders JSX"],
        ArtifactKind.COMPONENT_SOURCE,
        provider,
    )

    assert candidate == counter_component
    call = provider.calls_for("refiner")[0]
    assert "export default function Counter() {" in call.user_content
    assert "1. Unclosed delimiters: expected }" in call.user_content
    assert "2. Component must contain a return statement" in call.user_content
    assert call.options.temperature == pytest.approx(0.3)
    assert call.options.temperature < 0.7


def test_refiner_propagates_provider_errors(scripted, provider_error):
    provider = scripted(refiner=[provider_error])
    with pytest.raises(ProviderError):
        refine_candidate("x", ["bad"], ArtifactKind.COMPONENT_SOURCE, provider)
