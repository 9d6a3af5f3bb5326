# app/reference/icd10_codes.py
"""
ICD-10 behavioral-health diagnosis codes offered by the diagnosis picker.
"""
from typing import Dict, List, Tuple

ICD10_DIAGNOSES: List[Tuple[str, str]] = [
    # Depressive Disorders
    ("F32.0", "Major depressive disorder, single episode, mild"),
    ("F32.1", "Major depressive disorder, single episode, moderate"),
    ("F32.2", "Major depressive disorder, single episode, severe without psychotic features"),
    ("F32.3", "Major depressive disorder, single episode, severe with psychotic features"),
    ("F32.4", "Major depressive disorder, single episode, in partial remission"),
    ("F32.5", "Major depressive disorder, single episode, in full remission"),
    ("F32.9", "Major depressive disorder, single episode, unspecified"),
    ("F33.0", "Major depressive disorder, recurrent, mild"),
    ("F33.1", "Major depressive disorder, recurrent, moderate"),
    ("F33.2", "Major depressive disorder, recurrent, severe without psychotic features"),
    ("F33.3", "Major depressive disorder, recurrent, severe with psychotic features"),
    ("F33.41", "Major depressive disorder, recurrent, in partial remission"),
    ("F33.42", "Major depressive disorder, recurrent, in full remission"),
    ("F34.1", "Dysthymic disorder (Persistent depressive disorder)"),
    ("F34.81", "Disruptive mood dysregulation disorder"),
    # Anxiety Disorders
    ("F40.10", "Social anxiety disorder (Social phobia), unspecified"),
    ("F40.11", "Social anxiety disorder, generalized"),
    ("F40.00", "Agoraphobia, unspecified"),
    ("F40.01", "Agoraphobia with panic disorder"),
    ("F40.02", "Agoraphobia without panic disorder"),
    ("F40.210", "Arachnophobia"),
    ("F40.218", "Other animal type phobia"),
    ("F40.230", "Fear of blood"),
    ("F40.231", "Fear of injections and transfusions"),
    ("F40.232", "Fear of other medical care"),
    ("F40.233", "Fear of injury"),
    ("F40.240", "Claustrophobia"),
    ("F40.241", "Acrophobia"),
    ("F40.248", "Other situational type phobia"),
    ("F40.290", "Androphobia"),
    ("F40.291", "Gynephobia"),
    ("F40.298", "Other specified phobia"),
    ("F40.8", "Other phobic anxiety disorders"),
    ("F40.9", "Phobic anxiety disorder, unspecified"),
    ("F41.0", "Panic disorder without agoraphobia"),
    ("F41.1", "Generalized anxiety disorder"),
    ("F41.3", "Other mixed anxiety disorders"),
    ("F41.8", "Other specified anxiety disorders"),
    ("F41.9", "Anxiety disorder, unspecified"),
    # Trauma and Stressor-Related Disorders
    ("F43.0", "Acute stress reaction"),
    ("F43.10", "Post-traumatic stress disorder, unspecified"),
    ("F43.11", "Post-traumatic stress disorder, acute"),
    ("F43.12", "Post-traumatic stress disorder, chronic"),
    ("F43.20", "Adjustment disorder, unspecified"),
    ("F43.21", "Adjustment disorder with depressed mood"),
    ("F43.22", "Adjustment disorder with anxiety"),
    ("F43.23", "Adjustment disorder with mixed anxiety and depressed mood"),
    ("F43.24", "Adjustment disorder with disturbance of conduct"),
    ("F43.25", "Adjustment disorder with mixed disturbance of emotions and conduct"),
    ("F43.29", "Adjustment disorder with other symptoms"),
    # OCD and Related Disorders
    ("F42.2", "Mixed obsessional thoughts and acts"),
    ("F42.3", "Hoarding disorder"),
    ("F42.4", "Excoriation (skin-picking) disorder"),
    ("F42.8", "Other obsessive-compulsive disorder"),
    ("F42.9", "Obsessive-compulsive disorder, unspecified"),
    ("F45.22", "Body dysmorphic disorder"),
    # Bipolar and Related Disorders
    ("F31.0", "Bipolar disorder, current episode hypomanic"),
    ("F31.10", "Bipolar disorder, current episode manic without psychotic features, unspecified"),
    ("F31.11", "Bipolar disorder, current episode manic without psychotic features, mild"),
    ("F31.12", "Bipolar disorder, current episode manic without psychotic features, moderate"),
    ("F31.13", "Bipolar disorder, current episode manic without psychotic features, severe"),
    ("F31.2", "Bipolar disorder, current episode manic severe with psychotic features"),
    ("F31.30", "Bipolar disorder, current episode depressed, mild or moderate severity, unspecified"),
    ("F31.31", "Bipolar disorder, current episode depressed, mild"),
    ("F31.32", "Bipolar disorder, current episode depressed, moderate"),
    ("F31.4", "Bipolar disorder, current episode depressed, severe, without psychotic features"),
    ("F31.5", "Bipolar disorder, current episode depressed, severe, with psychotic features"),
    ("F31.60", "Bipolar disorder, current episode mixed, unspecified"),
    ("F31.61", "Bipolar disorder, current episode mixed, mild"),
    ("F31.62", "Bipolar disorder, current episode mixed, moderate"),
    ("F31.63", "Bipolar disorder, current episode mixed, severe, without psychotic features"),
    ("F31.64", "Bipolar disorder, current episode mixed, severe, with psychotic features"),
    ("F31.70", "Bipolar disorder, currently in remission, most recent episode unspecified"),
    ("F31.71", "Bipolar disorder, in partial remission, most recent episode hypomanic"),
    ("F31.72", "Bipolar disorder, in full remission, most recent episode hypomanic"),
    ("F31.73", "Bipolar disorder, in partial remission, most recent episode manic"),
    ("F31.74", "Bipolar disorder, in full remission, most recent episode manic"),
    ("F31.75", "Bipolar disorder, in partial remission, most recent episode depressed"),
    ("F31.76", "Bipolar disorder, in full remission, most recent episode depressed"),
    ("F31.77", "Bipolar disorder, in partial remission, most recent episode mixed"),
    ("F31.78", "Bipolar disorder, in full remission, most recent episode mixed"),
    ("F31.81", "Bipolar II disorder"),
    ("F31.89", "Other bipolar disorder"),
    ("F31.9", "Bipolar disorder, unspecified"),
    ("F34.0", "Cyclothymic disorder"),
    # Schizophrenia Spectrum
    ("F20.0", "Paranoid schizophrenia"),
    ("F20.1", "Disorganized schizophrenia"),
    ("F20.2", "Catatonic schizophrenia"),
    ("F20.3", "Undifferentiated schizophrenia"),
    ("F20.5", "Residual schizophrenia"),
    ("F20.81", "Schizophreniform disorder"),
    ("F20.89", "Other schizophrenia"),
    ("F20.9", "Schizophrenia, unspecified"),
    ("F21", "Schizotypal disorder"),
    ("F22", "Delusional disorders"),
    ("F23", "Brief psychotic disorder"),
    ("F25.0", "Schizoaffective disorder, bipolar type"),
    ("F25.1", "Schizoaffective disorder, depressive type"),
    ("F25.8", "Other schizoaffective disorders"),
    ("F25.9", "Schizoaffective disorder, unspecified"),
    # Eating Disorders
    ("F50.00", "Anorexia nervosa, unspecified"),
    ("F50.01", "Anorexia nervosa, restricting type"),
    ("F50.02", "Anorexia nervosa, binge eating/purging type"),
    ("F50.2", "Bulimia nervosa"),
    ("F50.81", "Binge eating disorder"),
    ("F50.82", "Avoidant/restrictive food intake disorder"),
    ("F50.89", "Other specified eating disorder"),
    ("F50.9", "Eating disorder, unspecified"),
    # Substance Use Disorders
    ("F10.10", "Alcohol use disorder, mild"),
    ("F10.20", "Alcohol use disorder, moderate"),
    ("F10.21", "Alcohol use disorder, moderate, in remission"),
    ("F10.229", "Alcohol dependence with intoxication, unspecified"),
    ("F10.239", "Alcohol dependence with withdrawal, unspecified"),
    ("F11.10", "Opioid use disorder, mild"),
    ("F11.20", "Opioid use disorder, moderate"),
    ("F11.21", "Opioid use disorder, moderate, in remission"),
    ("F12.10", "Cannabis use disorder, mild"),
    ("F12.20", "Cannabis use disorder, moderate"),
    ("F12.21", "Cannabis use disorder, moderate, in remission"),
    ("F13.10", "Sedative, hypnotic or anxiolytic use disorder, mild"),
    ("F13.20", "Sedative, hypnotic or anxiolytic use disorder, moderate"),
    ("F14.10", "Cocaine use disorder, mild"),
    ("F14.20", "Cocaine use disorder, moderate"),
    ("F15.10", "Other stimulant use disorder, mild"),
    ("F15.20", "Other stimulant use disorder, moderate"),
    # Personality Disorders
    ("F60.0", "Paranoid personality disorder"),
    ("F60.1", "Schizoid personality disorder"),
    ("F60.2", "Antisocial personality disorder"),
    ("F60.3", "Borderline personality disorder"),
    ("F60.4", "Histrionic personality disorder"),
    ("F60.5", "Obsessive-compulsive personality disorder"),
    ("F60.6", "Avoidant personality disorder"),
    ("F60.7", "Dependent personality disorder"),
    ("F60.81", "Narcissistic personality disorder"),
    ("F60.89", "Other specific personality disorders"),
    ("F60.9", "Personality disorder, unspecified"),
    # ADHD
    ("F90.0", "Attention-deficit hyperactivity disorder, predominantly inattentive type"),
    ("F90.1", "Attention-deficit hyperactivity disorder, predominantly hyperactive type"),
    ("F90.2", "Attention-deficit hyperactivity disorder, combined type"),
    ("F90.8", "Attention-deficit hyperactivity disorder, other type"),
    ("F90.9", "Attention-deficit hyperactivity disorder, unspecified type"),
    # Sleep Disorders
    ("F51.01", "Primary insomnia"),
    ("F51.02", "Adjustment insomnia"),
    ("F51.03", "Paradoxical insomnia"),
    ("F51.04", "Psychophysiologic insomnia"),
    ("F51.05", "Insomnia due to other mental disorder"),
    ("F51.09", "Other insomnia not due to a substance or known physiological condition"),
    ("F51.11", "Primary hypersomnia"),
    ("F51.12", "Insufficient sleep syndrome"),
    ("F51.13", "Hypersomnia due to other mental disorder"),
    ("F51.3", "Sleepwalking [somnambulism]"),
    ("F51.4", "Sleep terrors [night terrors]"),
    ("F51.5", "Nightmare disorder"),
    # Other
    ("F45.1", "Undifferentiated somatoform disorder"),
    ("F45.21", "Illness anxiety disorder"),
    ("F44.0", "Dissociative amnesia"),
    ("F44.1", "Dissociative fugue"),
    ("F44.81", "Dissociative identity disorder"),
    ("F44.89", "Other dissociative and conversion disorders"),
    ("F44.9", "Dissociative and conversion disorder, unspecified"),
    ("F63.0", "Pathological gambling"),
    ("F63.1", "Pyromania"),
    ("F63.2", "Kleptomania"),
    ("F63.3", "Trichotillomania"),
    ("F63.81", "Intermittent explosive disorder"),
    ("F91.1", "Conduct disorder, childhood-onset type"),
    ("F91.2", "Conduct disorder, adolescent-onset type"),
    ("F91.3", "Oppositional defiant disorder"),
    ("F91.9", "Conduct disorder, unspecified"),
    ("F93.0", "Separation anxiety disorder of childhood"),
    ("F94.0", "Selective mutism"),
    ("F94.1", "Reactive attachment disorder of childhood"),
    ("F94.2", "Disinhibited attachment disorder of childhood"),
    ("R45.851", "Suicidal ideations"),
    ("Z91.5", "Personal history of self-harm"),
]

_BY_CODE: Dict[str, str] = dict(ICD10_DIAGNOSES)


def describe_icd10(code: str) -> str:
    return _BY_CODE.get(code, "")


def search_icd10(query: str, limit: int = 15) -> List[Dict[str, str]]:
    """Case-insensitive substring match on code or description."""
    needle = (query or "").strip().lower()
    matches = [
        {"code": code, "description": description}
        for code, description in ICD10_DIAGNOSES
        if not needle or needle in code.lower() or needle in description.lower()
    ]
    return matches[:limit]
