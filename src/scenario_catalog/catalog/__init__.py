from .schema import Complexity, Difficulty, EnhancedCategory, EnhancedScenario, Philosophy

__all__ = ["Complexity", "Difficulty", "EnhancedCategory", "EnhancedScenario", "Philosophy"]
