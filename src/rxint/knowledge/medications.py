"""Medication to disease mapping table (reference data, version 1).

Keyed by lowercase generic name. Each row is
(disease_id, disease_name, likelihood, medication_class).
Brand names are not listed.
"""

MEDICATION_DISEASE_MAP = {
    # Diabetes medications
    "metformin": [("diabetes", "Diabetes", 0.95, "Biguanide")],
    "insulin": [("diabetes", "Diabetes", 0.98, "Insulin")],
    "glipizide": [("diabetes", "Diabetes", 0.90, "Sulfonylurea")],
    "glyburide": [("diabetes", "Diabetes", 0.90, "Sulfonylurea")],
    "glimepiride": [("diabetes", "Diabetes", 0.90, "Sulfonylurea")],
    "sitagliptin": [("diabetes", "Diabetes", 0.92, "DPP-4 Inhibitor")],
    "empagliflozin": [("diabetes", "Diabetes", 0.93, "SGLT2 Inhibitor")],

    # Hypertension medications
    "lisinopril": [("hypertension", "Hypertension", 0.90, "ACE Inhibitor")],
    "enalapril": [("hypertension", "Hypertension", 0.90, "ACE Inhibitor")],
    "ramipril": [("hypertension", "Hypertension", 0.90, "ACE Inhibitor")],
    "losartan": [("hypertension", "Hypertension", 0.88, "ARB")],
    "valsartan": [("hypertension", "Hypertension", 0.88, "ARB")],
    "amlodipine": [("hypertension", "Hypertension", 0.85, "Calcium Channel Blocker")],
    "nifedipine": [("hypertension", "Hypertension", 0.85, "Calcium Channel Blocker")],
    "hydrochlorothiazide": [("hypertension", "Hypertension", 0.80, "Diuretic")],
    "furosemide": [("hypertension", "Hypertension", 0.70, "Diuretic")],

    # Asthma medications
    "albuterol": [("asthma", "Asthma", 0.95, "Bronchodilator")],
    "salbutamol": [("asthma", "Asthma", 0.95, "Bronchodilator")],
    "fluticasone": [
        ("asthma", "Asthma", 0.80, "Corticosteroid"),
        ("copd", "COPD", 0.60, "Corticosteroid"),
    ],
    "budesonide": [
        ("asthma", "Asthma", 0.80, "Corticosteroid"),
        ("copd", "COPD", 0.60, "Corticosteroid"),
    ],
    "montelukast": [("asthma", "Asthma", 0.90, "Leukotriene Modifier")],

    # COPD medications
    "tiotropium": [("copd", "COPD", 0.95, "Anticholinergic")],
    "ipratropium": [("copd", "COPD", 0.90, "Anticholinergic")],

    # Heart disease medications
    "atorvastatin": [("heart-disease", "Heart Disease", 0.85, "Statin")],
    "simvastatin": [("heart-disease", "Heart Disease", 0.85, "Statin")],
    "rosuvastatin": [("heart-disease", "Heart Disease", 0.85, "Statin")],
    "aspirin": [("heart-disease", "Heart Disease", 0.70, "Antiplatelet")],
    "clopidogrel": [("heart-disease", "Heart Disease", 0.85, "Antiplatelet")],
    "metoprolol": [("heart-disease", "Heart Disease", 0.75, "Beta Blocker")],
    "carvedilol": [("heart-disease", "Heart Disease", 0.80, "Beta Blocker")],

    # Arthritis medications
    "ibuprofen": [("arthritis", "Arthritis", 0.70, "NSAID")],
    "naproxen": [("arthritis", "Arthritis", 0.75, "NSAID")],
    "celecoxib": [("arthritis", "Arthritis", 0.85, "COX-2 Inhibitor")],
    "methotrexate": [("arthritis", "Arthritis", 0.90, "DMARD")],

    # Thyroid medications
    "levothyroxine": [("thyroid-disorder", "Thyroid Disorders", 0.95, "Thyroid Hormone")],
    "liothyronine": [("thyroid-disorder", "Thyroid Disorders", 0.95, "Thyroid Hormone")],
    "methimazole": [("thyroid-disorder", "Thyroid Disorders", 0.90, "Antithyroid")],

    # Kidney disease medications
    "erythropoietin": [("kidney-disease", "Chronic Kidney Disease", 0.90, "ESA")],
    "sevelamer": [("kidney-disease", "Chronic Kidney Disease", 0.85, "Phosphate Binder")],

    # Epilepsy medications
    "levetiracetam": [("epilepsy", "Epilepsy", 0.95, "Anticonvulsant")],
    "valproate": [("epilepsy", "Epilepsy", 0.90, "Anticonvulsant")],
    "carbamazepine": [("epilepsy", "Epilepsy", 0.90, "Anticonvulsant")],
    "phenytoin": [("epilepsy", "Epilepsy", 0.90, "Anticonvulsant")],
    "lamotrigine": [("epilepsy", "Epilepsy", 0.88, "Anticonvulsant")],

    # Chronic pain medications
    "gabapentin": [("chronic-pain", "Chronic Pain Syndrome", 0.80, "Neuropathic Pain")],
    "pregabalin": [("chronic-pain", "Chronic Pain Syndrome", 0.85, "Neuropathic Pain")],
    "tramadol": [("chronic-pain", "Chronic Pain Syndrome", 0.75, "Opioid")],

    # Osteoporosis medications
    "alendronate": [("osteoporosis", "Osteoporosis", 0.95, "Bisphosphonate")],
    "risedronate": [("osteoporosis", "Osteoporosis", 0.95, "Bisphosphonate")],
    "ibandronate": [("osteoporosis", "Osteoporosis", 0.95, "Bisphosphonate")],

    # Depression medications
    "sertraline": [("depression", "Clinical Depression", 0.90, "SSRI")],
    "fluoxetine": [("depression", "Clinical Depression", 0.90, "SSRI")],
    "escitalopram": [("depression", "Clinical Depression", 0.90, "SSRI")],
    "venlafaxine": [("depression", "Clinical Depression", 0.88, "SNRI")],
    "duloxetine": [("depression", "Clinical Depression", 0.88, "SNRI")],
    "bupropion": [("depression", "Clinical Depression", 0.85, "NDRI")],
}
