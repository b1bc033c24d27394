# content/insights.py
"""
Templates des insights du dashboard, bilingues (nl / en).

Langage neutre et professionnel : on décrit un signal, on ne juge pas
l'équipe. Les placeholders {today}, {teamSize}, {days}, {delta} sont
remplis par engine/metrics/insights.py.
"""

INSIGHT_TEMPLATES = {
    # ── Participation ─────────────────────────────────────────
    "low_participation": {
        "id": "low-participation",
        "type": "participation",
        "severity": "info",
        "polarity": "neutral",
        "message": {
            "nl": "Beperkte data vandaag",
            "en": "Limited data today",
        },
        "detail": {
            "nl": "{today} van {teamSize} teamleden hebben ingecheckt.",
            "en": "{today} of {teamSize} team members have checked in.",
        },
        "suggestions": {
            "nl": [
                "Deel de check-in link als herinnering",
                "Check of het tijdstip werkt voor het team",
            ],
            "en": [
                "Share the check-in link as a reminder",
                "Check if the timing works for the team",
            ],
        },
    },

    "participation_improving": {
        "id": "participation-improving",
        "type": "participation",
        "severity": "info",
        "polarity": "positive",
        "message": {
            "nl": "Deelname neemt toe",
            "en": "Participation is increasing",
        },
        "detail": {
            "nl": "Meer teamleden checken regelmatig in dan vorige week.",
            "en": "More team members are checking in regularly compared to last week.",
        },
    },

    # ── Tendance ──────────────────────────────────────────────
    "declining_trend": {
        "id": "declining-trend",
        "type": "trend",
        "severity": "attention",
        "polarity": "concern",
        "message": {
            "nl": "Pulse is al {days} dagen lager",
            "en": "Pulse has been lower for {days} days",
        },
        "detail": {
            "nl": "Dit patroon kan wijzen op toegenomen druk of uitdagingen.",
            "en": "This pattern may indicate increased pressure or challenges.",
        },
        "suggestions": {
            "nl": [
                "Check in met het team over de workload",
                "Bekijk recente veranderingen die het team kunnen beïnvloeden",
                "Bespreek dit in de volgende retrospective",
            ],
            "en": [
                "Check in with the team about workload",
                "Review any recent changes that might have impacted the team",
                "Consider discussing in the next retrospective",
            ],
        },
    },

    "rising_trend": {
        "id": "rising-trend",
        "type": "trend",
        "severity": "info",
        "polarity": "positive",
        "message": {
            "nl": "Pulse verbetert al {days} dagen",
            "en": "Pulse has been improving for {days} days",
        },
        "detail": {
            "nl": "Het team lijkt in een positieve trend te zitten.",
            "en": "The team appears to be in a positive trend.",
        },
        "suggestions": {
            "nl": [
                "Noteer wat hieraan bijdraagt",
                "Leg lessen vast die kunnen helpen dit vast te houden",
            ],
            "en": [
                "Note what might be contributing to this",
                "Capture learnings that could help sustain it",
            ],
        },
    },

    "week_drop": {
        "id": "week-drop",
        "type": "trend",
        "severity": "attention",
        "polarity": "concern",
        "message": {
            "nl": "Duidelijke daling ten opzichte van vorige week",
            "en": "Notable drop compared to last week",
        },
        "detail": {
            "nl": "Week pulse is {delta} lager dan de vorige week.",
            "en": "Week pulse is {delta} lower than the previous week.",
        },
        "suggestions": {
            "nl": [
                "Wat is er deze week veranderd?",
                "Zijn er externe factoren die het team beïnvloeden?",
                "Ligt de sprint op schema?",
            ],
            "en": [
                "What changed this week?",
                "Are there external factors affecting the team?",
                "Is the sprint on track?",
            ],
        },
    },

    "week_improvement": {
        "id": "week-improvement",
        "type": "trend",
        "severity": "info",
        "polarity": "positive",
        "message": {
            "nl": "Week pulse is verbeterd",
            "en": "Week pulse has improved",
        },
        "detail": {
            "nl": "Week pulse is {delta} hoger dan de vorige week.",
            "en": "Week pulse is {delta} higher than the previous week.",
        },
    },

    # ── Patterns (zones) ──────────────────────────────────────
    "under_pressure": {
        "id": "under-pressure",
        "type": "pattern",
        "severity": "warning",
        "polarity": "concern",
        "message": {
            "nl": "Week pulse duidt op druk",
            "en": "Week pulse indicates pressure",
        },
        "detail": {
            "nl": "Het team gemiddelde suggereert aanhoudende stress of uitdagingen.",
            "en": "The team average suggests sustained stress or challenges.",
        },
        "suggestions": {
            "nl": [
                "Voer een open gesprek over de workload",
                "Bekijk sprint scope en commitments",
                "Check voor blockers of onduidelijke prioriteiten",
            ],
            "en": [
                "Have an open conversation about workload",
                "Review sprint scope and commitments",
                "Check for blockers or unclear priorities",
            ],
        },
    },

    "high_confidence": {
        "id": "high-confidence",
        "type": "pattern",
        "severity": "info",
        "polarity": "positive",
        "message": {
            "nl": "Team is in goede staat",
            "en": "Team is in good shape",
        },
        "detail": {
            "nl": "De pulse is consistent hoog met goede deelname.",
            "en": "The pulse is consistently high with good participation.",
        },
    },

    "mixed_signals": {
        "id": "mixed-signals",
        "type": "pattern",
        "severity": "info",
        "polarity": "neutral",
        "message": {
            "nl": "Gemengde signalen deze week",
            "en": "Mixed signals this week",
        },
        "detail": {
            "nl": "De scores variëren - sommige teamleden ervaren het anders.",
            "en": "Scores vary - some team members may be experiencing things differently.",
        },
        "suggestions": {
            "nl": [
                "De retro kan helpen om perspectief te krijgen",
                "Check individueel in waar gepast",
            ],
            "en": [
                "The retro can help get perspective",
                "Check in individually where appropriate",
            ],
        },
    },

    "consistently_stable": {
        "id": "consistently-stable",
        "type": "pattern",
        "severity": "info",
        "polarity": "neutral",
        "message": {
            "nl": "Stabiele week pulse",
            "en": "Stable week pulse",
        },
        "detail": {
            "nl": "Het team houdt een steady state aan.",
            "en": "The team is maintaining a steady state.",
        },
    },

    # ── Jalons ────────────────────────────────────────────────
    "streak_milestone": {
        "id": "streak-milestone",
        "type": "milestone",
        "severity": "info",
        "polarity": "positive",
        "message": {
            "nl": "{days} dagen consistent inchecken",
            "en": "{days} days of consistent check-ins",
        },
        "detail": {
            "nl": "Het team bouwt een solide meetgeschiedenis op.",
            "en": "The team is building a solid measurement history.",
        },
    },

    "first_week_complete": {
        "id": "first-week-complete",
        "type": "milestone",
        "severity": "info",
        "polarity": "positive",
        "message": {
            "nl": "Eerste week data compleet",
            "en": "First week of data complete",
        },
        "detail": {
            "nl": "Nu kunnen we week-over-week trends gaan vergelijken.",
            "en": "We can now start comparing week-over-week trends.",
        },
    },
}
