"""Static question catalog used to seed the question bank.

Order matters: the bank preserves catalog position, and seeded shuffles are
only reproducible over a stable input order. Append new entries at the end of
their group and never renumber ids, since stored assessments embed them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

from hireassess.models.question import Category, Question, QuestionType

GENERAL_TAG = "general"
MANAGEMENT_TAG = "management"


def _q(
    qid: str,
    category: str,
    tags: Sequence[str],
    difficulty: str,
    text: str,
    options: List[str],
    answer: Union[str, List[str]],
    qtype: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": qid,
        "type": qtype or (QuestionType.MULTI_CHOICE if isinstance(answer, list) else QuestionType.SINGLE_CHOICE),
        "category": category,
        "tags": list(tags),
        "difficulty": difficulty,
        "question": text,
        "options": options,
        "correct_answer": answer,
    }


_APT = Category.APTITUDE
_TECH = Category.TECHNICAL
_MGMT = Category.MANAGEMENT
_FE = ["Frontend Developer"]
_BE = ["Backend Developer"]
_DS = ["Data Scientist"]
_GEN = [GENERAL_TAG]
_MG = [MANAGEMENT_TAG]

_APTITUDE: List[Dict[str, Any]] = [
    _q("apt-001", _APT, [], "easy", "What is 15% of 200?", ["25", "30", "35", "40"], "B"),
    _q("apt-002", _APT, [], "easy", "If 5 apples cost $10, what is the cost of 8 apples?", ["$14", "$16", "$18", "$20"], "B"),
    _q("apt-003", _APT, [], "medium", "A train travels 240 km in 3 hours. What is its average speed?", ["70 km/h", "80 km/h", "90 km/h", "100 km/h"], "B"),
    _q("apt-004", _APT, [], "medium", "What is the next number in the sequence: 2, 6, 18, 54, ?", ["108", "162", "216", "270"], "B"),
    _q("apt-005", _APT, [], "hard", "If the ratio of boys to girls in a class is 3:2 and there are 15 boys, how many girls are there?", ["8", "10", "12", "15"], "B"),
    _q("apt-006", _APT, [], "easy", "All cats are animals. Some animals are pets. Therefore:", ["All cats are pets", "Some cats may be pets", "No cats are pets", "All pets are cats"], "B"),
    _q("apt-007", _APT, [], "medium", "If A > B and B > C, then:", ["A < C", "A = C", "A > C", "Cannot determine"], "C"),
    _q("apt-008", _APT, [], "hard", "In a certain code, FLOWER is written as EKNVDQ. How is GARDEN written?", ["FZQCDM", "FZQCEN", "FZQDEM", "GZQDEM"], "A"),
    _q("apt-009", _APT, [], "easy", 'Choose the synonym of "Abundant":', ["Scarce", "Plentiful", "Limited", "Rare"], "B"),
    _q("apt-010", _APT, [], "medium", 'Choose the antonym of "Optimistic":', ["Hopeful", "Positive", "Pessimistic", "Confident"], "C"),
    _q("apt-011", _APT, [], "easy", "What is 25% of 80?", ["15", "20", "25", "30"], "B"),
    _q("apt-012", _APT, [], "medium", "Complete the pattern: 1, 4, 9, 16, ?", ["20", "25", "30", "36"], "B"),
    _q("apt-013", _APT, [], "hard", "If it takes 5 machines 5 minutes to make 5 widgets, how long would it take 100 machines to make 100 widgets?", ["5 minutes", "20 minutes", "100 minutes", "500 minutes"], "A"),
    _q("apt-014", _APT, [], "medium", "Choose the word that best completes: Book is to Reading as Fork is to ?", ["Eating", "Kitchen", "Spoon", "Food"], "A"),
    _q("apt-015", _APT, [], "hard", "If some Bloops are Razzles and all Razzles are Lazzles, then some Bloops are definitely Lazzles.", ["True", "False", "Cannot be determined", "Insufficient information"], "A"),
]

_FRONTEND: List[Dict[str, Any]] = [
    _q("fe-001", _TECH, _FE, "easy", "What is HTML?", ["HyperText Markup Language", "High Tech Modern Language", "Home Tool Markup Language", "Hyperlink and Text Markup Language"], "A"),
    _q("fe-002", _TECH, _FE, "easy", "What does CSS stand for?", ["Cascading Style Sheets", "Computer Style Sheets", "Creative Style Sheets", "Colorful Style Sheets"], "A"),
    _q("fe-003", _TECH, _FE, "medium", "What is the Virtual DOM in React?", ["Virtual representation of DOM", "Database structure", "CSS framework", "Testing tool"], "A"),
    _q("fe-004", _TECH, _FE, "medium", "How do you handle state in React?", ["useState and useReducer", "Only props", "Global variables", "Local storage"], "A"),
    _q("fe-005", _TECH, _FE, "medium", "What is CSS Grid?", ["2D layout system", "1D layout system", "Animation library", "Color scheme"], "A"),
    _q("fe-006", _TECH, _FE, "medium", "What is responsive design?", ["Design that adapts to screen sizes", "Fast loading design", "Interactive design", "Colorful design"], "A"),
    _q("fe-007", _TECH, _FE, "hard", "What is JavaScript closure?", ["Function with access to outer scope", "Loop structure", "Data type", "Error handling"], "A"),
    _q("fe-008", _TECH, _FE, "hard", "What is the difference between let and var?", ["let has block scope, var has function scope", "No difference", "var is newer", "let is faster"], "A"),
    _q("fe-009", _TECH, _FE, "hard", "What is webpack?", ["Module bundler", "Testing framework", "Database", "CSS preprocessor"], "A"),
    _q("fe-010", _TECH, _FE, "hard", "What is TypeScript?", ["JavaScript with static typing", "New programming language", "CSS framework", "Database query language"], "A"),
    _q("fe-011", _TECH, _FE, "easy", "What is DOM?", ["Document Object Model", "Data Object Model", "Dynamic Object Model", "Database Object Model"], "A"),
    _q("fe-012", _TECH, _FE, "medium", "What is SASS?", ["CSS preprocessor", "JavaScript framework", "Database", "Testing tool"], "A"),
    _q("fe-013", _TECH, _FE, "medium", "What is JSX?", ["JavaScript XML", "Java Syntax Extension", "JSON XML", "JavaScript eXtension"], "A"),
    _q("fe-014", _TECH, _FE, "hard", "What is Redux?", ["State management library", "CSS framework", "Database", "Testing framework"], "A"),
    _q("fe-015", _TECH, _FE, "hard", "What is Next.js?", ["React framework", "CSS framework", "Database", "Testing tool"], "A"),
]

_BACKEND: List[Dict[str, Any]] = [
    _q("be-001", _TECH, _BE, "easy", "What does REST stand for?", ["Representational State Transfer", "Remote Execution Service Transport", "Resource State Table", "Reliable Event Stream Transfer"], "A"),
    _q("be-002", _TECH, _BE, "easy", "Which HTTP method is idempotent by definition?", ["POST", "PUT", "PATCH", "CONNECT"], "B"),
    _q("be-003", _TECH, _BE, "medium", "What does a database index primarily improve?", ["Write throughput", "Read lookup speed", "Disk usage", "Backup time"], "B"),
    _q("be-004", _TECH, _BE, "medium", "What is a race condition?", ["Outcome depends on timing of concurrent operations", "A slow network call", "A deadlocked query", "A failing unit test"], "A"),
    _q("be-005", _TECH, _BE, "medium", "Which isolation level prevents dirty reads but allows non-repeatable reads?", ["Read uncommitted", "Read committed", "Repeatable read", "Serializable"], "B"),
    _q("be-006", _TECH, _BE, "hard", "What problem does connection pooling solve?", ["Cost of opening a connection per request", "SQL injection", "Schema migrations", "Log rotation"], "A"),
    _q("be-007", _TECH, _BE, "hard", "What does the CAP theorem trade off?", ["Consistency, availability and partition tolerance", "Cost, accuracy and performance", "Caching, authentication and paging", "CPU, memory and disk"], "A"),
    _q("be-008", _TECH, _BE, "medium", "Which status code signals a missing resource?", ["200", "301", "404", "500"], "C"),
    _q("be-009", _TECH, _BE, "hard", "What is an N+1 query problem?", ["Issuing one query per row of a previous result", "A query with N joins", "A missing index", "A recursive CTE"], "A"),
    _q("be-010", _TECH, _BE, "medium", "What is the purpose of a message queue?", ["Decouple producers from consumers", "Store user sessions", "Render templates", "Compile code"], "A"),
    _q("be-011", _TECH, _BE, "easy", "Which format is most common for REST API payloads?", ["XML", "JSON", "CSV", "YAML"], "B"),
    _q("be-012", _TECH, _BE, "hard", "Which strategies help make a retried request safe? (Select all that apply)", ["Idempotency keys", "Random delays only", "Unique constraints", "Upserts"], ["A", "C", "D"]),
]

_DATA_SCIENCE: List[Dict[str, Any]] = [
    _q("ds-001", _TECH, _DS, "easy", "What does overfitting mean?", ["Model fits training noise and generalizes poorly", "Model is too simple", "Training is too slow", "Data is too large"], "A"),
    _q("ds-002", _TECH, _DS, "medium", "Which metric suits an imbalanced binary classification problem?", ["Accuracy", "F1 score", "Mean squared error", "R squared"], "B"),
    _q("ds-003", _TECH, _DS, "medium", "What is cross-validation used for?", ["Estimating generalization performance", "Cleaning data", "Feature hashing", "Data labeling"], "A"),
    _q("ds-004", _TECH, _DS, "easy", "What is the median of 3, 7, 9, 12, 20?", ["7", "9", "10.2", "12"], "B"),
    _q("ds-005", _TECH, _DS, "hard", "What does L1 regularization tend to produce?", ["Sparse coefficients", "Larger coefficients", "Non-linear features", "More training data"], "A"),
    _q("ds-006", _TECH, _DS, "medium", "What is a p-value?", ["Probability of data at least as extreme under the null hypothesis", "Probability the null is true", "Effect size", "Sample size"], "A"),
    _q("ds-007", _TECH, _DS, "hard", "Which techniques reduce variance of a model? (Select all that apply)", ["Bagging", "Adding more features", "Regularization", "More training data"], ["A", "C", "D"]),
    _q("ds-008", _TECH, _DS, "medium", "What does PCA do?", ["Projects data onto directions of maximal variance", "Clusters data", "Labels data", "Imputes missing values"], "A"),
    _q("ds-009", _TECH, _DS, "easy", "Which library is commonly used for dataframes in Python?", ["pandas", "flask", "pytest", "requests"], "A"),
    _q("ds-010", _TECH, _DS, "hard", "What is data leakage?", ["Training on information unavailable at prediction time", "Losing rows during a join", "A memory leak", "Exposing PII"], "A"),
]

_GENERAL_TECHNICAL: List[Dict[str, Any]] = [
    _q("gen-001", _TECH, _GEN, "easy", "What does Git primarily provide?", ["Version control", "Continuous deployment", "Package management", "Container runtime"], "A"),
    _q("gen-002", _TECH, _GEN, "easy", "What is the time complexity of binary search?", ["O(1)", "O(log n)", "O(n)", "O(n log n)"], "B"),
    _q("gen-003", _TECH, _GEN, "medium", "Which data structure is FIFO?", ["Stack", "Queue", "Tree", "Heap"], "B"),
    _q("gen-004", _TECH, _GEN, "medium", "What is the purpose of unit tests?", ["Verify small units of code in isolation", "Measure network latency", "Deploy to production", "Format source code"], "A"),
    _q("gen-005", _TECH, _GEN, "medium", "What does an API define?", ["A contract for how software components interact", "A database schema", "A UI layout", "A hardware driver"], "A"),
    _q("gen-006", _TECH, _GEN, "hard", "What is the worst-case time complexity of quicksort?", ["O(n)", "O(n log n)", "O(n^2)", "O(log n)"], "C"),
    _q("gen-007", _TECH, _GEN, "easy", "What does HTTPS add over HTTP?", ["Encryption via TLS", "Faster routing", "Compression only", "Caching"], "A"),
    _q("gen-008", _TECH, _GEN, "medium", "What is a hash map's average lookup complexity?", ["O(1)", "O(log n)", "O(n)", "O(n^2)"], "A"),
    _q("gen-009", _TECH, _GEN, "medium", "What is continuous integration?", ["Frequently merging and automatically testing changes", "Writing code without tests", "Deploying once a year", "Manual code review only"], "A"),
    _q("gen-010", _TECH, _GEN, "hard", "Which are SOLID principles? (Select all that apply)", ["Single responsibility", "Global state", "Open/closed", "Dependency inversion"], ["A", "C", "D"]),
    _q("gen-011", _TECH, _GEN, "easy", "What is a container image?", ["A packaged filesystem and config to run an application", "A screenshot", "A virtual disk partition", "A CI pipeline"], "A"),
    _q("gen-012", _TECH, _GEN, "medium", "What is technical debt?", ["Future cost of choosing an expedient solution now", "Money owed to vendors", "Unpaid licenses", "Hardware depreciation"], "A"),
]

_MANAGEMENT: List[Dict[str, Any]] = [
    _q("mgmt-001", _MGMT, _MG, "medium", "How do you handle a conflict between two team members?", ["Ignore it and hope it resolves", "Listen to both sides and mediate", "Take sides with the better performer", "Escalate to HR immediately"], "B"),
    _q("mgmt-002", _MGMT, _MG, "medium", "What is your approach to giving constructive feedback?", ["Only give positive feedback", "Be specific, timely, and actionable", "Give feedback only during reviews", "Focus on personality traits"], "B"),
    _q("mgmt-003", _MGMT, _MG, "medium", "How do you prioritize tasks when everything seems urgent?", ["Work on easiest tasks first", "Use impact vs effort matrix", "Work randomly", "Delegate everything"], "B"),
    _q("mgmt-004", _MGMT, _MG, "hard", "How do you motivate an underperforming team member?", ["Threaten termination", "Understand root causes and provide support", "Reduce their workload", "Ignore the issue"], "B"),
    _q("mgmt-005", _MGMT, _MG, "medium", "How do you communicate major changes to your team?", ["Send an email", "Hold a team meeting with Q&A", "Let them figure it out", "Use informal channels"], "B"),
    _q("mgmt-006", _MGMT, _MG, "medium", "How do you ensure project deadlines are met?", ["Work overtime", "Plan with buffer time and track progress", "Rush at the end", "Blame team members"], "B"),
    _q("mgmt-007", _MGMT, _MG, "hard", "How do you build trust within your team?", ["Be authoritative", "Be transparent and consistent", "Avoid difficult conversations", "Focus only on results"], "B"),
    _q("mgmt-008", _MGMT, _MG, "medium", "What is your approach to remote team management?", ["Micromanage everything", "Focus on outcomes and regular check-ins", "Let team work independently without guidance", "Only communicate through email"], "B"),
    _q("mgmt-009", _MGMT, _MG, "medium", "How do you handle team burnout?", ["Ignore it", "Redistribute workload and provide support", "Add more people to team", "Extend deadlines"], "B"),
    _q("mgmt-010", _MGMT, _MG, "hard", "What is your strategy for cross-functional collaboration?", ["Work in silos", "Regular alignment meetings and shared goals", "Compete with other teams", "Avoid other departments"], "B"),
    _q("mgmt-011", _MGMT, _MG, "medium", "How do you measure team performance?", ["Only track individual metrics", "Combine team goals with individual contributions", "Focus only on output quantity", "Use peer reviews only"], "B"),
    _q("mgmt-012", _MGMT, _MG, "hard", "How do you foster innovation in your team?", ["Stick to proven methods", "Encourage experimentation and learning from failures", "Punish mistakes", "Only follow company guidelines"], "B"),
    _q("mgmt-013", _MGMT, _MG, "medium", "Which are effective leadership qualities? (Select all that apply)", ["Empathy", "Micromanagement", "Clear communication", "Adaptability"], ["A", "C", "D"]),
    _q("mgmt-014", _MGMT, _MG, "medium", "Which are signs of a healthy team culture? (Select all that apply)", ["Open communication", "Fear of failure", "Collaboration", "Psychological safety"], ["A", "C", "D"]),
]

CATALOG: List[Dict[str, Any]] = [
    *_APTITUDE,
    *_FRONTEND,
    *_BACKEND,
    *_DATA_SCIENCE,
    *_GENERAL_TECHNICAL,
    *_MANAGEMENT,
]


def catalog_questions() -> List[Question]:
    """Return fresh Question models for every catalog entry, in catalog order."""
    return [Question.model_validate(entry) for entry in CATALOG]


__all__ = ["CATALOG", "GENERAL_TAG", "MANAGEMENT_TAG", "catalog_questions"]
