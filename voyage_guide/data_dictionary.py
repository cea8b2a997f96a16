"""
voyage_guide/data_dictionary.py

Column -> description, shown next to the data tables in the Streamlit app.
"""

DATA_DICTIONARY = {
    "PassengerId": "Unique identifier for the passenger (not used as a model feature).",
    "Survived": "Target variable (1 = survived, 0 = did not survive).",
    "Pclass": "Ticket class (1 = first, 2 = second, 3 = third).",
    "Name": "Full name, formatted 'Surname, Title. Given names'.",
    "Sex": "Passenger sex ('male' or 'female').",
    "Age": "Age in years; blank when unknown.",
    "SibSp": "Number of siblings / spouses aboard.",
    "Parch": "Number of parents / children aboard.",
    "Ticket": "Ticket number.",
    "Fare": "Passenger fare.",
    "Cabin": "Cabin number; blank when not recorded.",
    "Embarked": "Port of embarkation (C = Cherbourg, Q = Queenstown, S = Southampton).",
    "Title": "Honorific extracted from Name (e.g. 'Mr.', 'Miss.').",
    "FamilySize": "SibSp + Parch + 1 (the passenger themself).",
    "IsAlone": "True when FamilySize is 1.",
    "HasCabin": "True when a cabin number was recorded.",
    "AgeBin": "Age group: Child (<12), Teenager (<18), Young Adult (<35), Adult (<60), Elderly, Unknown.",
    "FareBin": "Fare group: Low (<10), Medium (<30), High (<100), Very High.",
}

PORT_NAMES = {"C": "Cherbourg", "Q": "Queenstown", "S": "Southampton", "Unknown": "Unknown"}
CLASS_NAMES = {1: "First Class", 2: "Second Class", 3: "Third Class"}
