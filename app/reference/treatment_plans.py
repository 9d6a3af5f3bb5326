# app/reference/treatment_plans.py
"""
Treatment-plan templates per problem area.

Each template lists the behavioral definitions, long-term goals, short-term
objectives (with a target timeframe) and interventions a clinician picks from
when building a patient's plan.
"""
from typing import Any, Dict, List, Optional

TREATMENT_PLAN_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "depression": {
        "label": "Depression",
        "behavioral_definitions": [
            "Depressed mood most of the day, nearly every day",
            "Diminished interest or pleasure in activities",
            "Significant weight loss or gain (more than 5% in a month)",
            "Insomnia or hypersomnia nearly every day",
            "Psychomotor agitation or retardation",
            "Fatigue or loss of energy nearly every day",
            "Feelings of worthlessness or excessive guilt",
            "Diminished ability to think or concentrate",
            "Recurrent thoughts of death or suicidal ideation",
            "Social withdrawal and isolation",
            "Neglect of personal hygiene and appearance",
            "Difficulty completing daily tasks and responsibilities"
        ],
        "long_term_goals": [
            "Alleviate depressed mood and return to previous level of functioning",
            "Develop healthy cognitive patterns and beliefs about self and the world",
            "Develop and implement effective coping strategies for managing mood",
            "Improve social functioning and interpersonal relationships",
            "Return to previous level of occupational/academic functioning"
        ],
        "short_term_objectives": [
            {"objective": "Identify and express feelings related to depression", "timeframe": "2 weeks"},
            {"objective": "Learn and implement at least 3 coping strategies for low mood", "timeframe": "4 weeks"},
            {"objective": "Engage in at least 3 pleasurable activities per week", "timeframe": "3 weeks"},
            {"objective": "Challenge and replace negative automatic thoughts", "timeframe": "6 weeks"},
            {"objective": "Establish regular sleep schedule (consistent bed/wake times)", "timeframe": "2 weeks"},
            {"objective": "Increase physical activity to 30 minutes, 3 times per week", "timeframe": "4 weeks"},
            {"objective": "Attend at least 2 social activities per week", "timeframe": "4 weeks"},
            {"objective": "Complete daily mood tracking journal", "timeframe": "1 week"},
            {"objective": "Reduce hopeless thoughts from daily to weekly occurrence", "timeframe": "8 weeks"}
        ],
        "interventions": [
            "Cognitive Behavioral Therapy (CBT) to identify and modify negative thought patterns",
            "Behavioral Activation to increase engagement in rewarding activities",
            "Psychoeducation about depression, its causes, and treatment options",
            "Teach and practice relaxation techniques (deep breathing, progressive muscle relaxation)",
            "Develop a daily activity schedule to structure time and increase accomplishment",
            "Assign homework to practice cognitive restructuring between sessions",
            "Explore underlying issues contributing to depression",
            "Coordinate with psychiatrist for medication evaluation if indicated",
            "Teach sleep hygiene strategies to improve sleep quality",
            "Use motivational interviewing to enhance engagement in treatment",
            "Develop a safety plan if suicidal ideation is present",
            "Process grief and loss issues as they relate to depression"
        ]
    },
    "anxiety": {
        "label": "Anxiety",
        "behavioral_definitions": [
            "Excessive worry occurring more days than not",
            "Difficulty controlling worry",
            "Restlessness or feeling keyed up or on edge",
            "Easily fatigued",
            "Difficulty concentrating or mind going blank",
            "Irritability",
            "Muscle tension",
            "Sleep disturbance",
            "Avoidance of anxiety-provoking situations",
            "Physical symptoms (racing heart, sweating, trembling)",
            "Panic attacks",
            "Anticipatory anxiety about future events"
        ],
        "long_term_goals": [
            "Reduce overall level of anxiety to manageable levels",
            "Eliminate panic attacks or reduce their frequency and intensity",
            "Develop effective coping mechanisms for managing anxiety",
            "Reduce avoidance behaviors and increase engagement in previously avoided activities",
            "Return to normal daily functioning without significant impairment from anxiety"
        ],
        "short_term_objectives": [
            {"objective": "Learn and demonstrate deep breathing techniques", "timeframe": "1 week"},
            {"objective": "Identify triggers that increase anxiety", "timeframe": "2 weeks"},
            {"objective": "Practice progressive muscle relaxation daily", "timeframe": "2 weeks"},
            {"objective": "Create and use a worry time to contain anxious thoughts", "timeframe": "3 weeks"},
            {"objective": "Face at least 2 avoided situations per week", "timeframe": "4 weeks"},
            {"objective": "Reduce panic attack frequency by 50%", "timeframe": "8 weeks"},
            {"objective": "Decrease safety behaviors by 75%", "timeframe": "6 weeks"},
            {"objective": "Challenge catastrophic thinking patterns", "timeframe": "4 weeks"},
            {"objective": "Implement grounding techniques when feeling overwhelmed", "timeframe": "2 weeks"}
        ],
        "interventions": [
            "Cognitive Behavioral Therapy (CBT) focusing on anxiety-specific cognitive distortions",
            "Exposure therapy using systematic desensitization or graduated exposure",
            "Teach diaphragmatic breathing and relaxation techniques",
            "Psychoeducation about the nature of anxiety and the fight-or-flight response",
            "Develop a fear hierarchy for exposure work",
            "Cognitive restructuring to challenge anxious predictions",
            "Interoceptive exposure for panic symptoms",
            "Mindfulness-based interventions to increase present-moment awareness",
            "Coordinate with psychiatrist for medication evaluation if indicated",
            "Assign between-session exposure homework",
            "Process underlying fears and concerns",
            "Teach worry management strategies (worry time, problem-solving)"
        ]
    },
    "trauma": {
        "label": "Trauma / PTSD",
        "behavioral_definitions": [
            "Intrusive memories or flashbacks of traumatic event",
            "Nightmares related to the trauma",
            "Intense psychological distress at exposure to trauma cues",
            "Avoidance of thoughts, feelings, or reminders of the trauma",
            "Negative alterations in cognitions (blame, guilt, shame)",
            "Persistent negative emotional state",
            "Diminished interest in significant activities",
            "Feelings of detachment from others",
            "Hypervigilance and exaggerated startle response",
            "Difficulty concentrating",
            "Sleep disturbance",
            "Irritability or angry outbursts"
        ],
        "long_term_goals": [
            "Process traumatic memories and reduce their emotional intensity",
            "Reduce or eliminate PTSD symptoms",
            "Develop effective coping strategies for trauma-related distress",
            "Restore sense of safety and trust in self and others",
            "Return to previous level of functioning and engagement in life"
        ],
        "short_term_objectives": [
            {"objective": "Establish safety and stabilization", "timeframe": "2 weeks"},
            {"objective": "Learn and practice grounding techniques", "timeframe": "1 week"},
            {"objective": "Develop a trauma narrative", "timeframe": "8 weeks"},
            {"objective": "Reduce avoidance of trauma reminders by 50%", "timeframe": "6 weeks"},
            {"objective": "Decrease frequency of nightmares", "timeframe": "8 weeks"},
            {"objective": "Identify and challenge trauma-related cognitive distortions", "timeframe": "6 weeks"},
            {"objective": "Increase engagement in social activities", "timeframe": "4 weeks"},
            {"objective": "Develop and utilize a self-care routine", "timeframe": "2 weeks"},
            {"objective": "Reduce hypervigilance symptoms", "timeframe": "10 weeks"}
        ],
        "interventions": [
            "Trauma-Focused Cognitive Behavioral Therapy (TF-CBT)",
            "EMDR (Eye Movement Desensitization and Reprocessing)",
            "Prolonged Exposure Therapy",
            "Cognitive Processing Therapy (CPT)",
            "Psychoeducation about trauma and PTSD",
            "Teach grounding and containment strategies",
            "Process traumatic memories in a safe therapeutic environment",
            "Address trauma-related guilt and shame",
            "Develop a safety plan",
            "Coordinate with psychiatrist for medication evaluation",
            "Teach sleep hygiene and nightmare management strategies",
            "Build coping skills for managing triggers and flashbacks"
        ]
    },
    "substance_use": {
        "label": "Substance Use",
        "behavioral_definitions": [
            "Use of substances in larger amounts or over longer period than intended",
            "Persistent desire or unsuccessful efforts to cut down",
            "Great deal of time spent obtaining, using, or recovering from substances",
            "Craving or strong urge to use substances",
            "Failure to fulfill major role obligations",
            "Continued use despite social or interpersonal problems",
            "Important activities given up or reduced",
            "Use in physically hazardous situations",
            "Continued use despite physical or psychological problems",
            "Tolerance (need for increased amounts)",
            "Withdrawal symptoms when not using"
        ],
        "long_term_goals": [
            "Achieve and maintain abstinence from substances",
            "Develop healthy coping mechanisms to replace substance use",
            "Improve overall quality of life and relationships",
            "Address underlying issues contributing to substance use",
            "Establish a strong recovery support network"
        ],
        "short_term_objectives": [
            {"objective": "Complete detoxification safely if needed", "timeframe": "1-2 weeks"},
            {"objective": "Identify triggers for substance use", "timeframe": "2 weeks"},
            {"objective": "Develop a relapse prevention plan", "timeframe": "4 weeks"},
            {"objective": "Attend 3 support group meetings per week", "timeframe": "1 week"},
            {"objective": "Learn and practice 5 coping skills for cravings", "timeframe": "3 weeks"},
            {"objective": "Identify and address 3 high-risk situations", "timeframe": "4 weeks"},
            {"objective": "Establish a sober support network", "timeframe": "6 weeks"},
            {"objective": "Address co-occurring mental health issues", "timeframe": "8 weeks"},
            {"objective": "Develop healthy lifestyle habits (sleep, nutrition, exercise)", "timeframe": "6 weeks"}
        ],
        "interventions": [
            "Motivational Interviewing to enhance readiness for change",
            "Cognitive Behavioral Therapy for substance use",
            "Relapse prevention training",
            "Psychoeducation about addiction and recovery",
            "Contingency management/reinforcement strategies",
            "Refer to and coordinate with 12-step or other support groups",
            "Family therapy to address enabling behaviors and improve support",
            "Coordinate with psychiatrist for medication-assisted treatment if indicated",
            "Process underlying trauma or mental health issues",
            "Develop healthy coping skills and lifestyle changes",
            "Crisis intervention and safety planning",
            "Case management for housing, employment, and other needs"
        ]
    },
    "bipolar": {
        "label": "Bipolar Disorder",
        "behavioral_definitions": [
            "Episodes of elevated, expansive, or irritable mood",
            "Decreased need for sleep",
            "Increased talkativeness or pressured speech",
            "Racing thoughts or flight of ideas",
            "Increased goal-directed activity or psychomotor agitation",
            "Excessive involvement in risky activities",
            "Inflated self-esteem or grandiosity",
            "Distractibility",
            "Depressive episodes with low mood and energy",
            "Mood instability and rapid cycling",
            "Impaired judgment during mood episodes",
            "Difficulty maintaining relationships and employment"
        ],
        "long_term_goals": [
            "Stabilize mood and reduce frequency/intensity of mood episodes",
            "Develop effective strategies for managing mood fluctuations",
            "Maintain medication compliance and psychiatric care",
            "Improve functioning in relationships, work, and daily life",
            "Recognize early warning signs of mood episodes"
        ],
        "short_term_objectives": [
            {"objective": "Maintain medication compliance", "timeframe": "Ongoing"},
            {"objective": "Identify personal early warning signs of mood episodes", "timeframe": "3 weeks"},
            {"objective": "Establish regular sleep schedule", "timeframe": "2 weeks"},
            {"objective": "Complete daily mood monitoring", "timeframe": "1 week"},
            {"objective": "Develop action plan for emerging symptoms", "timeframe": "4 weeks"},
            {"objective": "Reduce impulsive behaviors by 75%", "timeframe": "8 weeks"},
            {"objective": "Identify and avoid triggers for mood episodes", "timeframe": "4 weeks"},
            {"objective": "Build support network of at least 3 people", "timeframe": "6 weeks"},
            {"objective": "Learn stress management techniques", "timeframe": "4 weeks"}
        ],
        "interventions": [
            "Psychoeducation about bipolar disorder and its management",
            "Cognitive Behavioral Therapy adapted for bipolar disorder",
            "Interpersonal and Social Rhythm Therapy (IPSRT)",
            "Family-focused therapy",
            "Coordinate closely with psychiatrist for medication management",
            "Develop mood monitoring system (chart, app)",
            "Create action plan for early intervention",
            "Teach sleep hygiene and circadian rhythm management",
            "Process grief related to diagnosis and its impact",
            "Develop relapse prevention plan",
            "Address substance use if present",
            "Crisis planning and safety planning"
        ]
    },
    "relationship": {
        "label": "Relationship Issues",
        "behavioral_definitions": [
            "Frequent conflict with partner/family members",
            "Poor communication patterns",
            "Difficulty expressing needs and emotions",
            "Trust issues or betrayal trauma",
            "Codependency patterns",
            "Difficulty setting and maintaining boundaries",
            "Repeating unhealthy relationship patterns",
            "Attachment difficulties",
            "Isolation from social relationships",
            "Domestic conflict or abuse history",
            "Difficulty with intimacy",
            "Family of origin issues impacting current relationships"
        ],
        "long_term_goals": [
            "Develop healthy communication skills",
            "Establish and maintain appropriate boundaries",
            "Build secure attachment patterns",
            "Resolve conflicts in a healthy manner",
            "Improve overall relationship satisfaction"
        ],
        "short_term_objectives": [
            {"objective": "Learn and practice active listening skills", "timeframe": "2 weeks"},
            {"objective": "Identify personal boundaries and communicate them", "timeframe": "3 weeks"},
            {"objective": 'Use "I" statements during conflicts', "timeframe": "2 weeks"},
            {"objective": "Identify attachment style and its impact", "timeframe": "4 weeks"},
            {"objective": "Reduce frequency of arguments by 50%", "timeframe": "6 weeks"},
            {"objective": "Increase positive interactions with partner/family", "timeframe": "4 weeks"},
            {"objective": "Process past relationship wounds", "timeframe": "8 weeks"},
            {"objective": "Develop conflict resolution strategies", "timeframe": "4 weeks"},
            {"objective": "Identify and change codependent patterns", "timeframe": "8 weeks"}
        ],
        "interventions": [
            "Couples/family therapy if appropriate",
            "Communication skills training",
            "Attachment-focused interventions",
            "Emotionally Focused Therapy (EFT) techniques",
            "Explore family of origin patterns and their impact",
            "Teach boundary setting and assertiveness",
            "Process past relationship trauma",
            "Role-play healthy communication",
            "Gottman Method interventions",
            "Address domestic violence safety if applicable",
            "Build support network outside primary relationship",
            "Psychoeducation about healthy relationship patterns"
        ]
    }
}


def list_problem_areas() -> List[Dict[str, str]]:
    return [{"id": key, "label": value["label"]} for key, value in TREATMENT_PLAN_TEMPLATES.items()]


def get_treatment_plan_template(problem: str) -> Optional[Dict[str, Any]]:
    return TREATMENT_PLAN_TEMPLATES.get(problem)


def problem_label(problem: str) -> str:
    template = TREATMENT_PLAN_TEMPLATES.get(problem)
    return template["label"] if template else problem


def format_treatment_plan_summary(plan: Optional[Dict[str, Any]]) -> Optional[str]:
    """One-line summary such as 'Problem: Anxiety • Goals: 2 long-term goal(s) • 3 objective(s)'."""
    if not plan:
        return None
    if plan.get("legacy_text"):
        return plan["legacy_text"]

    parts = []
    if plan.get("problem"):
        parts.append(f"Problem: {problem_label(plan['problem'])}")
    if plan.get("long_term_goals"):
        parts.append(f"Goals: {len(plan['long_term_goals'])} long-term goal(s)")
    if plan.get("objectives"):
        parts.append(f"{len(plan['objectives'])} objective(s)")
    if plan.get("interventions"):
        parts.append(f"{len(plan['interventions'])} intervention(s)")
    return " • ".join(parts)
