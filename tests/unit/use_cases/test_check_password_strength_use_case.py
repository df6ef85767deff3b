import pytest

from authkit.app.use_cases.auth import CheckPasswordStrengthUseCase


@pytest.mark.asyncio
async def test_strong_password_scores_strong():
    result = await CheckPasswordStrengthUseCase().execute("Str0ng!Pass1357")

    assert result.is_ok()
    assert result.value.score == 7
    assert result.value.is_strong is True
    assert result.value.feedback == []
    assert result.value.strength == "Strong"


@pytest.mark.asyncio
async def test_empty_password_scores_zero():
    result = await CheckPasswordStrengthUseCase().execute("")

    assert result.value.score == 0
    assert result.value.is_strong is False
    assert result.value.strength == "Very weak"
    assert "Add digits" in result.value.feedback


@pytest.mark.asyncio
async def test_scoring_is_advisory_only():
    """A password can score strong and still fail the registration rules"""
    result = await CheckPasswordStrengthUseCase().execute("Password!2024x")

    assert result.value.is_strong is True
