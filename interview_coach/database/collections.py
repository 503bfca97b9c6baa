"""Collection names shared with the web frontend and admin scripts."""

USERS = "users"

CODING_QUESTIONS = "coding-questions"
SYSTEM_DESIGN_QUESTIONS = "system-design-questions"
BEHAVIORAL_QUESTIONS = "behavioral-questions"
LLM_QUESTIONS = "llm-questions"

LEARNING_HISTORY = "user-learning-history"
INTERVIEW_HISTORY = "user-interview-history"

CODING_INTERVIEWS = "coding-interviews"
BEHAVIORAL_INTERVIEWS = "behavioral-interviews"
SYSTEM_DESIGN_INTERVIEWS = "system-design-interviews"

COACH_PROFILES = "coachAgentProfiles"
ABILITY_MAPS = "abilityMaps"

# Question bank per kind, as used by the admin loader and mock routes
QUESTION_BANKS = {
    "coding": CODING_QUESTIONS,
    "system-design": SYSTEM_DESIGN_QUESTIONS,
    "behavioral": BEHAVIORAL_QUESTIONS,
    "llm": LLM_QUESTIONS,
}
