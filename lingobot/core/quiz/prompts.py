"""
Reply templates for the quiz conversation.

Fixed wording per language. Templates with placeholders are filled with
``str.format``. Language.NONE falls back to English.
"""

from lingobot.core.session.state import Language

# Sent after /start or a reset, before a language is chosen
GREETING = (
    "Hello! I can teach you two languages: English and Spanish. "
    "Please choose which one you'd like to learn:"
)

TEMPLATES: dict[Language, dict[str, str]] = {
    Language.ENGLISH: {
        "ask_name": "Great! Let's start with English. What's your name?",
        "welcome": (
            "Welcome, {name}! I'm excited to help you learn English. "
            "Could you tell me a bit about yourself?"
        ),
        "introduction_done": (
            "Oh, very interesting! Now, how about we expand your skills with "
            "some specific exercises? Choose a category you'd like to explore:"
        ),
        "menu": "Choose an exercise to continue practicing English:",
        "unknown_category": (
            "I didn't understand that. Please choose a category by clicking "
            "a button below."
        ),
        "correct": "Correct! 🎉 Your score is now {score}.",
        "incorrect": "Incorrect. The correct answer is: {answer}. ❌",
        "unknown_command": "Unknown command. Please try again. 🤷‍♂️",
    },
    Language.SPANISH: {
        "ask_name": "¡Genial! Empecemos con español. ¿Cómo te llamas?",
        "welcome": (
            "Bienvenido, {name}! Estoy emocionado de ayudarte a aprender "
            "español. ¿Podrías contarme un poco sobre ti?"
        ),
        "introduction_done": (
            "¡Oh, qué interesante! Ahora, ¿qué te parece si ampliamos tus "
            "habilidades con algunos ejercicios específicos? Elige una "
            "categoría que te gustaría explorar:"
        ),
        "menu": "Elige un ejercicio para continuar practicando español:",
        "unknown_category": (
            "No entendí eso. Por favor, elige una categoría haciendo clic en "
            "un botón de abajo."
        ),
        "correct": "¡Correcto! 🎉 Tu puntuación es ahora de {score}.",
        "incorrect": "Incorrecto. La respuesta correcta es: {answer}. ❌",
        "unknown_command": "Comando desconocido. Por favor, intenta de nuevo. 🤷‍♂️",
    },
}


def render(language: Language, key: str, **values) -> str:
    """
    Render a template in the given language.

    Args:
        language: Session language (NONE renders English)
        key: Template name, e.g. "welcome"
        **values: Placeholder values

    Returns:
        Reply text
    """
    templates = TEMPLATES.get(language, TEMPLATES[Language.ENGLISH])
    return templates[key].format(**values)
