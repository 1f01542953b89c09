"""Static knowledge tables for the MediTrack assistant.

Every table is a declaration-ordered tuple. Iteration order is part of the
matching contract: the first entry that matches wins, so entries must not be
re-sorted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import FeatureId


@dataclass(frozen=True)
class FeatureEntry:
    id: FeatureId
    keywords: tuple[str, ...]
    phrases: tuple[str, ...]


@dataclass(frozen=True)
class TopicEntry:
    name: str
    replies: tuple[str, ...]


FEATURES: tuple[FeatureEntry, ...] = (
    FeatureEntry(
        FeatureId.DASHBOARD,
        ("dashboard", "home", "main page", "overview", "statistics", "stats"),
        (
            "You can access the Dashboard by clicking on the 'Dashboard' link in the sidebar. "
            "The Dashboard provides an overview of your patients, appointments, and key metrics.",
            "The Dashboard is your central hub for monitoring patient activity, upcoming appointments, "
            "and important statistics. You can access it from the main sidebar.",
        ),
    ),
    FeatureEntry(
        FeatureId.PATIENTS,
        ("patients", "patient list", "all patients", "patient management"),
        (
            "The Patients section allows you to view and manage all your patients. "
            "You can access it from the sidebar by clicking on 'Patients'.",
            "To manage your patients, go to the Patients section from the main navigation. "
            "There you can add new patients, search for existing ones, and view detailed patient information.",
        ),
    ),
    FeatureEntry(
        FeatureId.PATIENT_DETAILS,
        ("patient details", "patient profile", "patient information", "patient record"),
        (
            "Patient Details provides comprehensive information about a specific patient, including their "
            "medical history, prescriptions, lab reports, and vitals. Click on any patient's name to access their details.",
            "To view a patient's complete profile, navigate to the Patients section and click on the patient's name. "
            "This will take you to the Patient Details page with all their medical information.",
        ),
    ),
    FeatureEntry(
        FeatureId.PRESCRIPTIONS,
        ("prescription", "prescribe", "medicine", "medication list", "drug", "prescribing"),
        (
            "You can create and manage prescriptions from the Patient Details page. Select a patient, then click on "
            "the 'Prescriptions' tab, and use the 'New Prescription' button to create a prescription.",
            "To add a new prescription, first navigate to the patient's details page, then click on the "
            "'Prescriptions' tab, and use the 'New Prescription' button.",
        ),
    ),
    FeatureEntry(
        FeatureId.LAB_REPORTS,
        ("lab", "laboratory", "test", "report", "lab result", "lab report", "test result"),
        (
            "Lab reports can be managed from the Patient Details page. Select a patient, click on the 'Lab Reports' "
            "tab, and use the 'Add Lab Report' button to create a new report.",
            "To view or add lab reports, go to the patient's details page and select the 'Lab Reports' tab. "
            "You can download existing reports or add new ones.",
        ),
    ),
    FeatureEntry(
        FeatureId.VITALS_ANALYTICS,
        (
            "vitals",
            "analytics",
            "vital signs",
            "trends",
            "graphs",
            "chart",
            "compare vitals",
            "blood pressure history",
            "temperature history",
            "weight history",
            "heart rate history",
        ),
        (
            "The Vitals Analytics feature allows you to compare patient vital signs across different visits with "
            "interactive graphs. Access it from the Patient Details page by clicking on the 'Vitals Analytics' tab.",
            "To analyze a patient's vitals over time, go to their Patient Details page and select the "
            "'Vitals Analytics' tab. You'll see graphs comparing blood pressure, heart rate, temperature, "
            "and weight across visits.",
        ),
    ),
    FeatureEntry(
        FeatureId.APPOINTMENTS,
        ("appointment", "schedule", "booking", "calendar", "visit"),
        (
            "You can manage appointments from the Appointments section in the sidebar. This allows you to "
            "schedule, view, and update patient appointments.",
            "To schedule or view appointments, click on the 'Appointments' option in the main navigation menu.",
        ),
    ),
    FeatureEntry(
        FeatureId.PROFILE,
        ("profile", "my account", "account settings", "my profile"),
        (
            "Your profile settings can be accessed by clicking on your name or profile picture in the top-right "
            "corner of the screen, then selecting 'Profile'.",
            "To update your personal information or change your profile picture, go to your Profile page from "
            "the dropdown menu in the top navigation.",
        ),
    ),
    FeatureEntry(
        FeatureId.SETTINGS,
        ("settings", "preferences", "configuration", "setup"),
        (
            "Application settings can be accessed by clicking on your name in the top-right corner, "
            "then selecting 'Settings'.",
            "To customize your MediTrack experience, including notification preferences and display options, "
            "visit the Settings page from the user menu.",
        ),
    ),
    FeatureEntry(
        FeatureId.HELP,
        ("help", "guide", "tutorial", "documentation", "how to"),
        (
            "For help and documentation, click on the '?' icon in the top navigation bar.",
            "If you need help using any feature of MediTrack, you can ask me specific questions or click the "
            "Help icon in the top navigation.",
        ),
    ),
)

FEATURES_BY_ID: dict[FeatureId, FeatureEntry] = {entry.id: entry for entry in FEATURES}

# Short canonical keys for phrases captured from "take me to X" style requests.
REDIRECT_ALIASES: tuple[tuple[str, FeatureId], ...] = (
    ("dashboard", FeatureId.DASHBOARD),
    ("home", FeatureId.DASHBOARD),
    ("main", FeatureId.DASHBOARD),
    ("patients", FeatureId.PATIENTS),
    ("patient list", FeatureId.PATIENTS),
    ("patient details", FeatureId.PATIENT_DETAILS),
    ("patient profile", FeatureId.PATIENT_DETAILS),
    ("prescriptions", FeatureId.PRESCRIPTIONS),
    ("medications", FeatureId.PRESCRIPTIONS),
    ("lab", FeatureId.LAB_REPORTS),
    ("lab reports", FeatureId.LAB_REPORTS),
    ("laboratory", FeatureId.LAB_REPORTS),
    ("tests", FeatureId.LAB_REPORTS),
    ("vitals", FeatureId.VITALS_ANALYTICS),
    ("vital signs", FeatureId.VITALS_ANALYTICS),
    ("analytics", FeatureId.VITALS_ANALYTICS),
    ("vitals analytics", FeatureId.VITALS_ANALYTICS),
    ("graphs", FeatureId.VITALS_ANALYTICS),
    ("charts", FeatureId.VITALS_ANALYTICS),
    ("appointments", FeatureId.APPOINTMENTS),
    ("schedule", FeatureId.APPOINTMENTS),
    ("profile", FeatureId.PROFILE),
    ("settings", FeatureId.SETTINGS),
    ("help", FeatureId.HELP),
)

GREETINGS: tuple[str, ...] = (
    "Hello! I'm MediTrack Assistant. How can I help you with your medical queries today?",
    "Hi there! I'm here to assist with your medical questions. What can I help you with?",
    "Welcome to MediTrack! I'm your medical assistant. How may I assist you today?",
)

FAREWELLS: tuple[str, ...] = (
    "Take care! Remember to follow your prescribed treatment plan.",
    "Goodbye! Don't hesitate to reach out if you have more medical questions.",
    "Have a great day! Remember to stay hydrated and take your medications as prescribed.",
)

WELCOME_MESSAGE = (
    "Welcome, doctor. I'm your MediTrack clinical assistant. "
    "How may I support your patient care activities today?"
)

APOLOGY_MESSAGE = (
    "I apologize, but I'm having trouble processing your request at the moment. "
    "How else can I assist you with the MediTrack system?"
)

TOPICS: tuple[TopicEntry, ...] = (
    TopicEntry(
        "headache",
        (
            "Headaches can be caused by stress, dehydration, lack of sleep, or other underlying conditions. "
            "For occasional headaches, rest, hydration, and over-the-counter pain relievers may help. "
            "If headaches are severe or persistent, please consult your doctor.",
            "For headache relief, try resting in a dark, quiet room, staying hydrated, and using over-the-counter "
            "pain relievers as directed. If headaches are frequent or severe, please schedule an appointment "
            "with your doctor.",
        ),
    ),
    TopicEntry(
        "fever",
        (
            "Fever is often a sign that your body is fighting an infection. Rest, stay hydrated, and take "
            "acetaminophen or ibuprofen to reduce fever. If fever persists over 3 days, exceeds 103°F "
            "(39.4°C), or is accompanied by severe symptoms, seek medical attention.",
            "For fever management: rest, drink plenty of fluids, and take over-the-counter fever reducers as "
            "directed. Contact your doctor if the fever is high, lasts more than a few days, or comes with "
            "severe symptoms.",
        ),
    ),
    TopicEntry(
        "cold",
        (
            "Common cold symptoms include runny nose, sore throat, cough, and mild fever. Rest, stay hydrated, "
            "use over-the-counter cold medications for symptom relief. Most colds resolve within 7-10 days. "
            "If symptoms worsen or persist longer, consult your doctor.",
            "For cold relief: rest, drink warm fluids, gargle with salt water for sore throat, and use "
            "over-the-counter medications for specific symptoms. If symptoms worsen after a week, please "
            "contact your doctor.",
        ),
    ),
    TopicEntry(
        "prescription",
        (
            "I can't provide specific prescription advice. Please follow your doctor's instructions for all "
            "medications. If you have questions about your prescription, contact your doctor or pharmacist.",
            "For questions about your prescription, please refer to your doctor's instructions or contact your "
            "pharmacy. Never adjust medication dosages without consulting your healthcare provider.",
        ),
    ),
    TopicEntry(
        "appointment",
        (
            "To schedule an appointment, you can use the MediTrack scheduling feature or contact the clinic "
            "directly. Please have your patient ID and preferred dates/times ready.",
            "Need to schedule an appointment? You can do so through the MediTrack system or by calling the "
            "clinic. Make sure to mention any urgent concerns when booking.",
        ),
    ),
    TopicEntry(
        "diet",
        (
            "A balanced diet typically includes fruits, vegetables, whole grains, lean proteins, and healthy fats. "
            "For personalized dietary advice, please consult your doctor or a registered dietitian.",
            "Healthy eating habits include regular meals, plenty of fruits and vegetables, whole grains, lean "
            "proteins, and limited processed foods. For specific dietary plans, please consult with a "
            "healthcare professional.",
        ),
    ),
    TopicEntry(
        "exercise",
        (
            "Regular physical activity is important for overall health. Aim for at least 150 minutes of moderate "
            "exercise per week. Always consult your doctor before starting a new exercise program, especially "
            "if you have existing health conditions.",
            "Exercise benefits include improved cardiovascular health, better mood, and weight management. "
            "Start slowly and gradually increase intensity. If you have health concerns, discuss appropriate "
            "exercise options with your doctor.",
        ),
    ),
    TopicEntry(
        "sleep",
        (
            "Adults typically need 7-9 hours of quality sleep per night. Establish a regular sleep schedule, "
            "create a relaxing bedtime routine, and make your bedroom comfortable, dark, and quiet. If you have "
            "persistent sleep problems, consult your doctor.",
            "For better sleep: maintain consistent sleep hours, avoid screens before bedtime, limit caffeine and "
            "alcohol, and create a comfortable sleep environment. If you have ongoing sleep issues, discuss "
            "with your healthcare provider.",
        ),
    ),
    TopicEntry(
        "stress",
        (
            "Stress management techniques include deep breathing, meditation, physical activity, adequate sleep, "
            "and connecting with others. If stress is overwhelming or affecting your daily life, consider "
            "speaking with a mental health professional.",
            "To manage stress: practice mindfulness, engage in regular physical activity, maintain social "
            "connections, and ensure adequate rest. For persistent stress or anxiety, professional support "
            "may be beneficial.",
        ),
    ),
    TopicEntry(
        "medication",
        (
            "Always take medications as prescribed by your doctor. Don't stop or change dosages without "
            "consulting your healthcare provider. Keep a list of all medications you take, including "
            "over-the-counter drugs and supplements.",
            "Medication safety tips: follow prescribed dosages, be aware of potential side effects, inform your "
            "doctor of all medications you take, and store medications properly away from heat, moisture, "
            "and light.",
        ),
    ),
)

TOPICS_BY_NAME: dict[str, TopicEntry] = {entry.name: entry for entry in TOPICS}

# Symptom synonym patterns, checked only after every literal topic name missed.
TOPIC_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b(headache|migraine|head pain|head hurt)\b", re.IGNORECASE), "headache"),
    (re.compile(r"\b(fever|temperature|feeling hot)\b", re.IGNORECASE), "fever"),
    (re.compile(r"\b(cold|flu|cough|sneez|runny nose|stuffy|congestion)\b", re.IGNORECASE), "cold"),
    (re.compile(r"\b(prescription|medicine|drug|medication|pill)\b", re.IGNORECASE), "medication"),
    (re.compile(r"\b(appointment|schedule|booking|visit|meet|doctor|consultation)\b", re.IGNORECASE), "appointment"),
    (re.compile(r"\b(diet|nutrition|food|eat|eating|meal)\b", re.IGNORECASE), "diet"),
    (re.compile(r"\b(exercise|workout|fitness|physical activity|sport)\b", re.IGNORECASE), "exercise"),
    (re.compile(r"\b(sleep|insomnia|rest|tired|fatigue|bed)\b", re.IGNORECASE), "sleep"),
    (re.compile(r"\b(stress|anxiety|worried|nervous|tension|pressure)\b", re.IGNORECASE), "stress"),
)
