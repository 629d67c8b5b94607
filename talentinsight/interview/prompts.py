"""
Interview prompt templates.

This module contains all the prompt templates sent to the external model,
keeping them separate from the request plumbing for easier maintenance and editing.
"""


ENUM_TOKENS_NOTE = (
    "Keep enum values (such as 'Low', 'Medium', 'High', 'Good', 'Average', 'Poor', "
    "'Not Visible', 'None', 'D', 'I', 'S', 'C', 'Interviewer', 'Candidate') in English "
    "so the system stays compatible."
)


class InterviewPrompts:
    """Collection of all interview-related prompts."""

    @staticmethod
    def analysis_prompt(candidate_name: str, position: str, language: str, has_cv: bool = False) -> str:
        """Instruction for the multimodal interview analysis."""
        prompt = f"""
You are an expert HR Interview Analyst specialising in behavioural psychology and DISC profiling.
Analyse this interview recording for the candidate named {candidate_name} who is applying for the position of {position}.

IMPORTANT: Write all free-text output (summary, transcript, analysis, recommendation, observations) in **{language}**.
{ENUM_TOKENS_NOTE}

Your tasks:
1. Transcribe the key parts of the conversation.
2. Summarise the candidate's answers.
3. **Video Emotion Analysis**: Analyse visual and audio cues. Detect nervousness, confidence level, eye-contact quality and defensive body language.
4. **DISC Analysis**: From communication style, intonation and word choice, determine the DISC profile (Dominance, Influence, Steadiness, Compliance). Estimate a score (0-100) for each dimension.
5. Analyse general personality traits.
6. Identify the main hard skills and soft skills. If a CV is attached, validate the claims in the CV against the answers in the interview.
7. Detect "red flags" (inconsistencies, defensiveness, lack of detail).
8. **Missed Opportunities**: List follow-up questions the interviewer *should* have asked.
9. Give a match score (0-100) and a risk level.

Return the result as strictly structured JSON that conforms to the declared response schema.
        """.strip()

        if has_cv:
            prompt += (
                "\n\nNOTE: The candidate's CV document is attached. Use the CV to verify technical "
                "background and experience, but use the AUDIO/VIDEO RECORDING as the primary source "
                "for the personality and DISC analysis."
            )
        return prompt

    @staticmethod
    def questions_prompt(position: str, experience_level: str, skills: str, language: str, count: int) -> str:
        """Instruction for drafting interview questions."""
        return f"""
Create {count} advanced behavioural and technical interview questions for the position of {position} at experience level {experience_level}.
Focus on these skills: {skills or '-'}.

IMPORTANT: Use **{language}** for all questions and explanations.
For every question, explain the "intent" (what the interviewer should look for).
The questions must be hard and designed to reveal real competence.
        """.strip()

    @staticmethod
    def follow_up_prompt(original_question: str, candidate_answer: str, language: str) -> str:
        """Instruction for simulating a probing follow-up."""
        return f"""
The interviewer asked: "{original_question}"
The candidate answered: "{candidate_answer}"

The candidate's answer may be shallow, unclear, or lack specific detail (STAR method).

IMPORTANT: Use **{language}**.
Write one sharp, polite, but probing follow-up question that digs into the missing parts.
Explain why this follow-up question needs to be asked.
        """.strip()
