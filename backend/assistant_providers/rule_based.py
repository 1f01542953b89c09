from __future__ import annotations

from dataclasses import dataclass

from chat_memory import Message


@dataclass(frozen=True)
class ReferenceRule:
    """Detailed answer given when every keyword group has a hit.

    ``follow_up`` lets one group be satisfied by the previous user turn
    instead of the current message, for questions like "and for children?".
    """

    name: str
    groups: tuple[tuple[str, ...], ...]
    answer: str
    excluded: tuple[str, ...] = ()
    follow_up: tuple[str, ...] = ()

    def matches(self, text: str, previous: str) -> bool:
        if _contains_any(text, self.excluded):
            return False
        for group in self.groups:
            if _contains_any(text, group):
                continue
            if group == self.follow_up and _contains_any(previous, group):
                continue
            return False
        return True


@dataclass(frozen=True)
class KeywordGroup:
    name: str
    keywords: tuple[str, ...]
    reply: str


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


_HEART_RATE_WORDS = ("heart rate", "pulse", "bpm", "beats")
_COVID_WORDS = ("covid", "covid-19", "coronavirus", "sars-cov-2")

REFERENCE_RULES: tuple[ReferenceRule, ...] = (
    ReferenceRule(
        "pain_medication",
        (("medication", "medicine", "drug"), ("pain", "ache", "hurt", "body pain", "headache")),
        "For pain management, commonly recommended medications include: 1) NSAIDs like ibuprofen (Advil, Motrin) "
        "or naproxen (Aleve) for inflammatory pain, 2) Acetaminophen (Tylenol) for mild to moderate pain without "
        "significant inflammation, 3) Topical analgesics for localized pain, and 4) Muscle relaxants for muscle "
        "spasms. For severe pain, prescription medications may be necessary. Always consider patient-specific "
        "factors such as age, comorbidities, and potential drug interactions before recommending pain medications.",
    ),
    ReferenceRule(
        "hypertension_symptoms",
        (("symptoms", "signs"), ("hypertension", "high blood pressure")),
        "Common symptoms of hypertension include headaches, shortness of breath, nosebleeds, flushing, dizziness, "
        "chest pain, visual changes, and blood in urine. However, hypertension is often asymptomatic and discovered "
        "during routine check-ups, which is why it's sometimes called the 'silent killer'. Regular blood pressure "
        "monitoring is essential for early detection.",
    ),
    ReferenceRule(
        "troponin",
        (("troponin",), ("elevated", "high", "interpret")),
        "Elevated troponin levels typically indicate myocardial injury or infarction. Normal values are "
        "<0.04 ng/mL, and any elevation warrants investigation. Consider acute coronary syndrome if accompanied by "
        "chest pain or ECG changes. Other causes include myocarditis, pulmonary embolism, sepsis, renal failure, "
        "and strenuous exercise. Serial measurements are more informative than a single value.",
    ),
    ReferenceRule(
        "type2_diabetes_treatment",
        (("treatment", "manage", "therapy"), ("diabetes", "diabetic"), ("type 2", "type ii", "adult onset")),
        "Treatment for Type 2 Diabetes typically follows a stepwise approach: 1) Lifestyle modifications (diet, "
        "exercise, weight loss) are foundational. 2) Metformin is usually the first-line medication unless "
        "contraindicated. 3) Second-line options include SGLT2 inhibitors, GLP-1 receptor agonists, DPP-4 "
        "inhibitors, sulfonylureas, or thiazolidinediones. 4) Insulin therapy may be needed if glycemic targets "
        "aren't met with oral medications. Regular monitoring of HbA1c (target typically <7%) is essential.",
    ),
    ReferenceRule(
        "amoxicillin_side_effects",
        (("side effects", "adverse effects", "reactions"), ("amoxicillin", "antibiotic")),
        "Common side effects of amoxicillin include diarrhea, stomach upset, nausea, vomiting, and rash. More "
        "serious but less common side effects include severe allergic reactions (anaphylaxis), Clostridium "
        "difficile-associated diarrhea, blood disorders, and crystalluria. Patients should complete the full "
        "course and contact their healthcare provider if they experience severe diarrhea, rash, or signs of an "
        "allergic reaction.",
    ),
    ReferenceRule(
        "pneumonia_diagnosis",
        (("diagnose", "diagnosis", "detect", "identify"), ("pneumonia", "lung infection")),
        "Diagnosing pneumonia involves clinical assessment, laboratory tests, and imaging. Key clinical findings "
        "include cough, fever, dyspnea, and abnormal breath sounds (crackles/rales). Diagnostic tests include chest "
        "X-ray, white cell count, CRP or procalcitonin, sputum and blood cultures, and pulse oximetry. The CURB-65 "
        "score or Pneumonia Severity Index can help determine the treatment setting.",
    ),
    ReferenceRule(
        "systolic_vs_diastolic",
        (("difference", "distinguish", "between"), ("systolic",), ("diastolic",)),
        "Systolic blood pressure (the upper number) measures the pressure in arteries when the heart contracts, "
        "while diastolic blood pressure (the lower number) measures the pressure when the heart is at rest between "
        "beats. Normal adult readings are below 120/80 mmHg. Elevated systolic pressure is generally considered a "
        "more significant cardiovascular risk factor, especially in older adults.",
    ),
    ReferenceRule(
        "blood_glucose_ranges",
        (("normal", "range", "level"), ("blood glucose", "blood sugar", "glucose")),
        "Normal blood glucose ranges are: fasting plasma glucose 70-99 mg/dL (3.9-5.5 mmol/L), 2 hours post-meal "
        "<140 mg/dL (<7.8 mmol/L), and HbA1c <5.7%. Prediabetes is indicated by fasting glucose of 100-125 mg/dL "
        "or HbA1c of 5.7-6.4%. Diabetes is diagnosed when fasting glucose is ≥126 mg/dL, 2-hour post-meal is "
        "≥200 mg/dL, or HbA1c is ≥6.5%.",
    ),
    ReferenceRule(
        "pediatric_heart_rate",
        (("children", "child", "kid", "pediatric"), _HEART_RATE_WORDS),
        "Normal heart rates for children vary by age: newborns 100-160 bpm, infants 80-150 bpm, toddlers "
        "80-130 bpm, preschoolers 80-120 bpm, school-age children 70-110 bpm, and adolescents 60-100 bpm. "
        "Consistently high or low heart rates outside these ranges should be evaluated by a pediatrician.",
        follow_up=_HEART_RATE_WORDS,
    ),
    ReferenceRule(
        "adult_heart_rate",
        (("normal", "average", "typical"), _HEART_RATE_WORDS),
        "The normal resting heart rate for adults ranges from 60 to 100 beats per minute (bpm). Well-conditioned "
        "athletes might have a resting heart rate closer to 40 bpm. During exercise, the target heart rate is "
        "typically 50-85% of the maximum heart rate (220 minus age). Consistently high resting heart rates or "
        "significant changes should be evaluated by a healthcare provider.",
    ),
    ReferenceRule(
        "covid_symptoms",
        (("symptoms", "signs", "indications"), _COVID_WORDS),
        "Common symptoms of COVID-19 include fever or chills, cough, shortness of breath, fatigue, muscle or body "
        "aches, headache, new loss of taste or smell, sore throat, congestion, nausea, and diarrhea. Symptoms "
        "typically appear 2-14 days after exposure. Emergency warning signs include trouble breathing, persistent "
        "chest pain, new confusion, and bluish lips or face.",
    ),
    ReferenceRule(
        "covid_treatment",
        (("treatment", "therapy", "medication", "cure"), _COVID_WORDS),
        "COVID-19 treatments depend on severity. For mild to moderate cases in high-risk patients, antivirals like "
        "nirmatrelvir/ritonavir (Paxlovid) or remdesivir may be prescribed within 5-7 days of symptom onset. For "
        "severe cases requiring hospitalization, treatments include remdesivir, dexamethasone for those needing "
        "oxygen, and anticoagulation for thrombosis prevention, alongside supportive care.",
        follow_up=_COVID_WORDS,
    ),
    ReferenceRule(
        "headache_types",
        (("headache", "migraine", "head pain"),),
        "Common headache types include tension headaches (band-like pressure), migraines (often unilateral, "
        "pulsating, with nausea or photophobia), and cluster headaches (severe, unilateral orbital pain). Secondary "
        "headaches may indicate serious conditions, especially if accompanied by fever, altered mental status, or "
        "neurological deficits.",
        excluded=("medication", "medicine", "drug"),
    ),
    ReferenceRule(
        "fever_evaluation",
        (("fever", "high temperature", "febrile"),),
        "Fever (temperature >100.4°F/38°C) is an immune response to infection or inflammation. Management includes "
        "antipyretics for comfort, adequate hydration, and treating the underlying cause. Red flags warranting "
        "urgent evaluation include temperature >103°F in adults, fever in immunocompromised patients, or neck "
        "stiffness, severe headache, or altered mental status.",
    ),
    ReferenceRule(
        "medication_adherence",
        (("take medication", "medication adherence", "follow prescription", "skip dose", "stop taking"),),
        "Always take medications as prescribed. Don't stop or change dosages without consulting your healthcare "
        "provider. For patients struggling with adherence, consider pill organizers, reminders, simplified "
        "regimens, and addressing barriers like cost or side effects.",
    ),
)

KEYWORD_GROUPS: tuple[KeywordGroup, ...] = (
    KeywordGroup(
        "patient_records",
        ("patient", "record", "chart", "history"),
        "I can help you access patient records and medical history through the MediTrack system. To create a new "
        "record, navigate to the Patients section and select 'Add New Patient'. Would you like me to show you how "
        "to navigate to specific patient information?",
    ),
    KeywordGroup(
        "diagnosis",
        ("diagnosis", "diagnose", "symptoms", "condition", "disease"),
        "The MediTrack system provides clinical decision support tools to assist with diagnosis. You can access "
        "evidence-based diagnostic criteria, differential diagnosis suggestions, and symptom analyzers through the "
        "Clinical Tools section. Would you like me to guide you to specific diagnostic resources?",
    ),
    KeywordGroup(
        "prescriptions",
        ("prescription", "medication", "drug", "medicine", "dosage"),
        "MediTrack's e-prescription module allows you to create, manage, and send prescriptions electronically. "
        "The system includes a medication database with dosing information, contraindications, and interaction "
        "checking. You can access a patient's medication history from their profile page.",
    ),
    KeywordGroup(
        "lab_results",
        ("lab", "test", "result", "report", "imaging"),
        "Laboratory and diagnostic results can be managed through the Lab Reports section. You can view test "
        "results with reference ranges, track values over time, add clinical interpretations, and flag abnormal "
        "values.",
    ),
    KeywordGroup(
        "scheduling",
        ("appointment", "schedule", "booking", "calendar"),
        "The MediTrack scheduling system allows you to manage appointments efficiently. You can view your daily "
        "schedule, create new appointments, set recurring visits, and manage cancellations or reschedules.",
    ),
    KeywordGroup(
        "navigation",
        ("how to", "where is", "find", "navigate", "access", "dashboard"),
        "The MediTrack interface is designed for efficient clinical workflows. The main navigation menu on the "
        "left provides access to all major functions, and the dashboard displays your schedule, pending tasks, and "
        "important notifications. Is there a specific feature you're trying to locate?",
    ),
    KeywordGroup(
        "documentation",
        ("note", "documentation", "soap", "document"),
        "Clinical documentation in MediTrack supports various note formats including SOAP, H&P, procedure notes, "
        "and consult notes. Notes are linked to the relevant patient encounter and searchable within the system.",
    ),
    KeywordGroup(
        "billing",
        ("billing", "code", "claim", "insurance", "reimbursement", "icd", "cpt"),
        "The billing module in MediTrack supports ICD-10 and CPT coding with code suggestions based on "
        "documentation. You can manage claims, track reimbursements, and verify insurance eligibility.",
    ),
)

GENERIC_REPLY = (
    "I understand you have a question about medical practice or the MediTrack system. As your clinical "
    "assistant, I'm here to help with patient management, clinical documentation, prescriptions, lab reports, "
    "and system navigation. Could you provide more specific details about what you need assistance with?"
)


def _previous_user_turn(history: list[Message]) -> str:
    for turn in reversed(history):
        if turn.role == "user":
            return turn.content.lower()
    return ""


class RuleBasedProvider:
    """Deterministic terminal stage; always produces text."""

    name = "rules"

    def __init__(
        self,
        reference_rules: tuple[ReferenceRule, ...] = REFERENCE_RULES,
        keyword_groups: tuple[KeywordGroup, ...] = KEYWORD_GROUPS,
        generic_reply: str = GENERIC_REPLY,
    ) -> None:
        self.reference_rules = reference_rules
        self.keyword_groups = keyword_groups
        self.generic_reply = generic_reply

    @property
    def enabled(self) -> bool:
        return True

    def match(self, message: str, history: list[Message]) -> tuple[str, str] | None:
        """Return ``(rule name, reply)`` for the first matching rule or group."""
        text = (message or "").lower()
        previous = _previous_user_turn(history)
        for rule in self.reference_rules:
            if rule.matches(text, previous):
                return rule.name, rule.answer
        for group in self.keyword_groups:
            if _contains_any(text, group.keywords):
                return group.name, group.reply
        return None

    def generate(self, message: str, history: list[Message], extra_context: str | None = None) -> str:
        matched = self.match(message, history)
        return matched[1] if matched else self.generic_reply
