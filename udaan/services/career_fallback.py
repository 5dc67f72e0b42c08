"""
Rule-based career suggestions

Used whenever the language model is not configured or its answer can't be
trusted. Deterministic and free of I/O so results can be cached by input.
"""
import re
from typing import Dict, List, Optional, Tuple

from udaan.schemas.career import CareerItem, CareerRequest, CareerSuggestionResult
from udaan.services.text import clean_text
from udaan.utils.logger import get_logger

logger = get_logger("career.fallback")


# ========== Canned suggestions ==========
SOFTWARE_DEVELOPER = {
    "title": "Software Developer",
    "description": "Build applications and solve complex problems through code.",
    "why": "Matches your technical interests and programming skills.",
    "keySkills": ["Programming fundamentals", "Version control (Git)", "Problem solving", "Testing"],
    "marketDemand": "High demand across product companies, startups and IT services",
    "growthPath": "Junior Developer → Software Engineer → Senior Engineer / Tech Lead",
    "steps": [
        "Master a programming language",
        "Build a portfolio of projects",
        "Contribute to open source",
        "Apply for junior developer positions",
    ],
    "requiredQualifications": "Degree in computer science or equivalent portfolio",
    "learningResources": ["freeCodeCamp", "CS50 (Harvard)", "The Odin Project"],
}

DEVOPS_ENGINEER = {
    "title": "DevOps Engineer",
    "description": "Bridge development and operations through automation and tooling.",
    "why": "Combines technical skills with system administration.",
    "keySkills": ["Linux", "Cloud platforms", "Containers", "CI/CD"],
    "marketDemand": "Strong demand as teams move workloads to the cloud",
    "growthPath": "DevOps Engineer → Site Reliability Engineer → Platform Architect",
    "steps": [
        "Learn cloud platforms (AWS/Azure)",
        "Master containerization",
        "Study CI/CD pipelines",
        "Get cloud certifications",
    ],
    "requiredQualifications": "Programming background; cloud certification helpful",
    "learningResources": ["AWS Skill Builder", "Docker documentation", "Kubernetes basics tutorial"],
}

UX_UI_DESIGNER = {
    "title": "UX/UI Designer",
    "description": "Create intuitive and beautiful user interfaces.",
    "why": "Aligns with your creative skills and interest in design.",
    "keySkills": ["Design principles", "Figma", "User research", "Prototyping"],
    "marketDemand": "Steady demand in product teams and agencies",
    "growthPath": "Junior Designer → UX/UI Designer → Senior / Lead Designer",
    "steps": ["Learn design principles", "Master design tools", "Build a portfolio", "Take on freelance projects"],
    "requiredQualifications": "Portfolio of design work; degree optional",
    "learningResources": ["Google UX Design Certificate", "Figma tutorials"],
}

PRODUCT_DESIGNER = {
    "title": "Product Designer",
    "description": "Shape product experiences from concept to implementation.",
    "why": "Combines creativity with strategic thinking.",
    "keySkills": ["User research", "Prototyping", "Product metrics", "Collaboration"],
    "marketDemand": "Growing demand in product-led companies",
    "growthPath": "Product Designer → Senior Product Designer → Design Manager",
    "steps": [
        "Study user research",
        "Learn prototyping tools",
        "Understand product metrics",
        "Network with product teams",
    ],
    "requiredQualifications": "Design portfolio with end-to-end case studies",
    "learningResources": ["Interaction Design Foundation", "Nielsen Norman Group articles"],
}

BUSINESS_ANALYST = {
    "title": "Business Analyst",
    "description": "Bridge business needs with technical solutions.",
    "why": "Matches your analytical skills and business interest.",
    "keySkills": ["SQL", "Excel", "Requirements gathering", "Data visualization"],
    "marketDemand": "Consistent demand in finance, consulting and tech",
    "growthPath": "Business Analyst → Senior Analyst → Product / Analytics Manager",
    "steps": ["Learn SQL and data analysis basics", "Practice with a real dataset", "Document business insights"],
    "requiredQualifications": "Bachelor's degree in business, economics or a related field",
    "learningResources": ["Google Data Analytics Certificate", "Mode SQL tutorial"],
}

PROJECT_COORDINATOR = {
    "title": "Project Coordinator",
    "description": "Support project delivery and coordination.",
    "why": "Leverages organizational and leadership skills.",
    "keySkills": ["Organization", "Communication", "Documentation", "Scheduling"],
    "marketDemand": "Steady demand across industries",
    "growthPath": "Coordinator → Project Manager → Program Manager",
    "steps": ["Join a project team as support", "Learn one PM tool", "Document and reflect on outcomes"],
    "requiredQualifications": "High school or diploma; PM short course useful",
    "learningResources": ["Google Project Management Certificate", "Trello / Asana guides"],
}

JUNIOR_PROJECT_MANAGER = {
    "title": "Junior Project Manager",
    "description": "Manage small projects and stakeholder communication.",
    "why": "Builds on leadership and organizational experience.",
    "keySkills": ["Planning", "Stakeholder communication", "Risk tracking"],
    "marketDemand": "Demand in IT services, construction and operations",
    "growthPath": "Junior PM → Project Manager → Senior PM / PMO Lead",
    "steps": ["Take a short PM fundamentals course", "Assist on project planning", "Lead a small deliverable"],
    "requiredQualifications": "Degree or diploma; CAPM certification helpful",
    "learningResources": ["PMI CAPM prep", "Coursera: Project Management Principles"],
}

DIGITAL_MARKETING_SPECIALIST = {
    "title": "Digital Marketing Specialist",
    "description": "Drive online growth using analytics and content.",
    "why": "Combines creative & analytical skills for measurable impact.",
    "keySkills": ["Content strategy", "SEO", "Google Analytics", "Social media"],
    "marketDemand": "High demand as businesses shift spend online",
    "growthPath": "Marketing Specialist → Marketing Manager → Head of Growth",
    "steps": [
        "Take a short digital marketing course",
        "Learn basic analytics (Google Analytics)",
        "Run one small campaign",
    ],
    "requiredQualifications": "Any degree; marketing certificates valued",
    "learningResources": ["Google Digital Garage", "HubSpot Academy"],
}

GENERIC_UX_UI_DESIGNER = {
    **UX_UI_DESIGNER,
    "why": "Aligns with creative and visual skills.",
    "steps": ["Learn design fundamentals", "Build a mini-portfolio", "Seek feedback from peers"],
}

GENERIC_PROJECT_COORDINATOR = {
    **PROJECT_COORDINATOR,
    "description": "Support project delivery and team coordination.",
    "why": "Gives practical experience across functions.",
    "steps": ["Learn a PM tool (Trello/Asana)", "Assist on a small project", "Document outcomes"],
}


# ========== Rules ==========
# (interest keywords, skill keywords, {task: suggestion})
KEYWORD_RULES: List[Tuple[Tuple[str, ...], Tuple[str, ...], Dict[str, dict]]] = [
    (
        ("tech", "software"),
        ("programming", "coding", "python", "machine"),
        {"explore": SOFTWARE_DEVELOPER, "skills": DEVOPS_ENGINEER},
    ),
    (
        ("design", "creative", "branding"),
        ("design", "ux", "ui"),
        {"explore": UX_UI_DESIGNER, "industry": PRODUCT_DESIGNER},
    ),
    (
        ("business", "data", "analytics"),
        ("analysis", "sql", "data"),
        {"explore": BUSINESS_ANALYST, "opportunities": BUSINESS_ANALYST},
    ),
    (
        ("project", "management", "leadership"),
        ("management", "leadership"),
        {"explore": PROJECT_COORDINATOR, "skills": JUNIOR_PROJECT_MANAGER},
    ),
]

# Checked in order; later matches override earlier ones
MOOD_RULES = [
    (re.compile(r"confused|unsure|lost", re.IGNORECASE), "🤔 Unsure"),
    (re.compile(r"hopeful|open|optimistic", re.IGNORECASE), "😌 Hopeful"),
    (re.compile(r"anxious|stressed|worried", re.IGNORECASE), "😟 Anxious"),
]
DEFAULT_MOOD = "😌 Neutral"


def _mentions(text: str, keywords) -> bool:
    return any(keyword in text for keyword in keywords)


def _default_suggestion(interests: str, skills: str, task: str) -> dict:
    """Single suggestion used when no keyword rule produced one"""
    if task == "courses" or _mentions(interests, ("marketing", "brand")) or "marketing" in skills:
        return DIGITAL_MARKETING_SPECIALIST
    if "design" in interests or "design" in skills:
        return GENERIC_UX_UI_DESIGNER
    return GENERIC_PROJECT_COORDINATOR


def detect_mood(mindset: str) -> str:
    mood = DEFAULT_MOOD
    if not mindset:
        return mood
    for pattern, label in MOOD_RULES:
        if pattern.search(mindset):
            mood = label
    return mood


def generate_fallback(request: CareerRequest) -> CareerSuggestionResult:
    """Build suggestions from keyword rules over the user's interests and skills"""
    interests = clean_text(request.interests)
    skills = clean_text(request.skills)
    mindset = clean_text(request.mindset)
    lower_interests = interests.lower()
    lower_skills = skills.lower()
    task = request.context.focus

    suggestions: List[dict] = []
    for interest_keywords, skill_keywords, by_task in KEYWORD_RULES:
        if not (_mentions(lower_interests, interest_keywords) or _mentions(lower_skills, skill_keywords)):
            continue
        suggestion: Optional[dict] = by_task.get(task)
        if suggestion:
            suggestions.append(suggestion)

    if not suggestions:
        suggestions.append(_default_suggestion(lower_interests, lower_skills, task))

    insight = (
        f'Based on: "{mindset or "unspecified"}" and interests="{interests or "unspecified"}" '
        f"— tailored suggestions for a {task} focus."
    )

    titles = [s["title"] for s in suggestions]
    logger.info(f"Fallback chosen for task={task} titles={titles}", extra={"task": task, "titles": titles})

    return CareerSuggestionResult(
        careers=[CareerItem.model_validate(s) for s in suggestions],
        mood=detect_mood(mindset),
        insight=insight,
    )
