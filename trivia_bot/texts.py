"""User-facing texts (Spanish)."""

TITLE = "Friki-Trivia"

WELCOME = (
    "👋 Bienvenido a Friki-Trivia\n\n"
    "Introduce tu nombre de usuario para empezar:"
)
WELCOME_BACK = "👋 ¡Hola de nuevo, {name}! Cargando las preguntas de la semana..."

EMPTY_NAME = "Por favor, introduce un nombre de usuario."
IDENTITY_ERROR = "Error al buscar usuario. Inténtalo de nuevo."
QUESTIONS_LOAD_ERROR = "Error al cargar las preguntas. Inténtalo de nuevo."
NO_QUESTIONS = "No hay preguntas para esta semana. ¡Vuelve más tarde!"
NO_SELECTION = "Por favor, selecciona una opción."
RECORDER_WARNING = "⚠️ Error al guardar respuesta. Tu puntuación no se ha perdido."
GENERIC_ERROR = "Ha ocurrido un error. Inténtalo de nuevo."
SESSION_EXPIRED = "La partida ha caducado. Escribe /start para empezar de nuevo."

QUESTION_HEADER = "❓ Pregunta {number} de {total}"
NEXT_QUESTION = "Siguiente Pregunta ➡️"
FINISH_QUIZ = "Finalizar Trivial 🏁"
RETRY = "🔄 Reintentar"

COMPLETED_TITLE = "🏁 ¡Trivial Completado!"
SCORE_LINE = "{emoji} Tu puntuación: {correct} de {total} ({percent}%)"
THANKS_LINE = "¡Gracias por jugar, {name}!"
DETAILED_RESULTS = "📋 Resultados Detallados:"
YOUR_ANSWER = "Tu respuesta: {option} ({verdict})"
VERDICT_CORRECT = "Correcta"
VERDICT_INCORRECT = "Incorrecta"
CORRECT_ANSWER = "Correcta: {option}"
EXPLANATION = "💡 Explicación: {explanation}"

PLAY_AGAIN = "🔁 Jugar de nuevo"
LEADERBOARD = "🏆 Ver tabla de clasificación"
LEADERBOARD_SOON = "¡La tabla de clasificación llegará próximamente!"
