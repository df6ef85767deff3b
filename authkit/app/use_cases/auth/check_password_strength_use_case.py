from authkit.app.services.password_strength import score, strength_label
from authkit.result import Result, Return
from .dtos import PasswordStrengthResponse


class CheckPasswordStrengthUseCase:
    """Advisory scoring only; never blocks and never touches storage."""

    async def execute(self, password: str) -> Result[PasswordStrengthResponse]:
        result = score(password)
        return Return.ok(
            PasswordStrengthResponse(
                score=result.score,
                is_strong=result.is_strong,
                feedback=result.feedback,
                strength=strength_label(result.score),
            )
        )
