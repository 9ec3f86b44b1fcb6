from typing import Tuple

GRADE_LEVEL = "7º ano"
THEME = "futurista ou espacial"

class PromptBuilder:
	def __init__(self, grade_level: str = GRADE_LEVEL, theme: str = THEME) -> None:
		self.grade_level = grade_level
		self.theme = theme

	def build(self, *, difficulty: str) -> str:
		return (
			f"Gere um novo problema de matemática para o {self.grade_level} com um tema {self.theme}. "
			f"A dificuldade deve ser {difficulty}. "
			"Forneça quatro opções de múltipla escolha, das quais exatamente uma é correta."
		)

	def system_instruction(self, *, difficulty: str) -> str:
		return (
			"Você é uma IA futurista criando problemas de matemática para cadetes em uma academia espacial. "
			f"Os problemas devem ser adequados para o nível do {self.grade_level} com uma dificuldade de {difficulty}."
		)

	def build_pair(self, *, difficulty: str) -> Tuple[str, str]:
		return self.build(difficulty=difficulty), self.system_instruction(difficulty=difficulty)
