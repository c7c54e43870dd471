"""System prompt, task instructions and fixed tutor/student messages."""

SYSTEM_PROMPT = """\
You are an experienced, wise, strict but fair school mathematics teacher.
Your goal is to teach the student to think, not simply to hand over the answer.
Address the student informally, as "you".
Communication style: supportive, pedagogical, structured.
"""

HINT_INSTRUCTION = (
    "Look at this photo of a solution to a problem. The student is asking "
    "for a hint. Do not give the full solution or the answer. Find the place "
    "where the student may have got stuck or made a mistake, and give a "
    "leading hint. If the solution looks correct, simply encourage the "
    "student and suggest double-checking the calculations."
)

ANALYSIS_INSTRUCTION = """\
The hint did not help. Carry out a full review of the solution in the photo.
1. Check the course of the solution step by step.
2. If there are mistakes, list them point by point. For each mistake, explain WHY it is not allowed, referring to the relevant mathematical rules.
3. Write out the correct solution and the answer.
Use Markdown for formatting (bold text, lists).
"""

# Shown when the model answers with no text
HINT_EMPTY_FALLBACK = (
    "Sorry, I couldn't make out the solution. Try taking a sharper photo."
)
ANALYSIS_EMPTY_FALLBACK = (
    "I couldn't put together a full review. Try uploading the photo again."
)

# Shown when the request itself fails
HINT_ERROR_MESSAGE = (
    "Something went wrong while analysing the image. Please try again."
)
ANALYSIS_ERROR_MESSAGE = (
    "Something went wrong while preparing the review. Please try again later."
)

# Appended on the student's behalf when they ask for the full analysis
HINT_DID_NOT_HELP = "The hint didn't help. Where is the mistake?"
