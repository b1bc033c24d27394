# content/coach.py
"""
Questions de réflexion proposées à l'équipe selon sa tendance.
Clé = Trend.value, "no_data" tant que la porte des données minimales est fermée.
"""

COACH_QUESTIONS = {
    "improving": [
        {"nl": "Wat draagt bij aan de positieve energie in het team?",
         "en": "What is contributing to the positive energy in the team?"},
        {"nl": "Hoe kunnen we dit momentum vasthouden?",
         "en": "How can we maintain this momentum?"},
        {"nl": "Wat hebben we recent anders gedaan dat goed werkt?",
         "en": "What have we done differently recently that works well?"},
    ],
    "declining": [
        {"nl": "Wat houdt ons bezig dat we nog niet besproken hebben?",
         "en": "What is on our minds that we haven't discussed yet?"},
        {"nl": "Waar lopen we tegenaan in ons dagelijks werk?",
         "en": "What obstacles are we facing in our daily work?"},
        {"nl": "Wat zou het team helpen om beter te functioneren?",
         "en": "What would help the team function better?"},
    ],
    "stable": [
        {"nl": "Wat kunnen we doen om een stap verder te komen?",
         "en": "What can we do to take the next step?"},
        {"nl": "Waar zijn we trots op als team?",
         "en": "What are we proud of as a team?"},
        {"nl": "Welke kleine verbetering zou veel impact hebben?",
         "en": "What small improvement would have a big impact?"},
    ],
    "no_data": [
        {"nl": "Hoe voelt het om deel uit te maken van dit team?",
         "en": "How does it feel to be part of this team?"},
        {"nl": "Wat maakt ons werk betekenisvol?",
         "en": "What makes our work meaningful?"},
        {"nl": "Waar kijken we naar uit deze week?",
         "en": "What are we looking forward to this week?"},
    ],
}
