"""
Generation prompts.

Prompt templates for creating, editing and repairing resume LaTeX and
email drafts. The LaTeX template and rule blocks are passed in as
template variables so their braces are never parsed as placeholders.

Dependencies: langchain_core.prompts
System role: Prompt templates for the generation agent
"""

from langchain_core.prompts import PromptTemplate

LATEX_TEMPLATE = r"""\documentclass[letterpaper,11pt]{article}

\usepackage[empty]{fullpage}
\usepackage[hidelinks]{hyperref}
\usepackage{tabularx}

\addtolength{\oddsidemargin}{-0.6in}
\addtolength{\textwidth}{1.2in}
\addtolength{\topmargin}{-.7in}
\addtolength{\textheight}{1.4in}

\setlength{\parindent}{0pt}

\begin{document}

\begin{center}
{\Huge \textbf{FULL NAME}} \\
Location \\
Email | Phone | Links
\end{center}

\section*{Education}
\begin{itemize}
\item \textbf{Institution} \hfill Dates \\
Degree / Field
\end{itemize}

\section*{Experience}
\begin{itemize}
\item \textbf{Role} \hfill Dates \\
Company
\begin{itemize}
\item Achievement
\end{itemize}
\end{itemize}

\section*{Projects}
\begin{itemize}
\item \textbf{Project Name} \hfill Tech Stack
\begin{itemize}
\item Description
\end{itemize}
\end{itemize}

\section*{Technical Skills}
\begin{itemize}
\item Languages:
\item Frameworks:
\item Tools:
\end{itemize}

\section*{Certifications}
\begin{itemize}
\item Certification
\end{itemize}

\end{document}
"""

LATEX_RULES = r"""You are a LaTeX resume generator.

Your output MUST compile with a standard LaTeX engine.

## Strict Rules
1. Output ONLY raw LaTeX (no markdown, no explanations).
2. NEVER define custom commands or macros (no \newcommand).
3. Every \item must be inside \begin{itemize} ... \end{itemize}.
4. Always close every environment and brace.
5. Do NOT use enumitem, titlesec, tikz, fontawesome, multicol or graphics.
6. Do NOT use spacing hacks like negative \vspace.
7. Allowed commands: \section*, \textbf, \textit, \href, itemize, tabularx, \\.

## Content Rules
- Use ONLY real user data; do not invent information
- Omit sections with no data instead of fabricating them
- Tailor content to the job description, ATS friendly, one page
- Escape special characters: & % $ # _ { } ~ ^"""

EMAIL_RULES = """You are a professional email writer.

## Rules
1. Output ONLY the email as plain text (no markdown, no code fences).
2. Start with a single "Subject:" line, then a blank line, then the body.
3. Keep it concise, specific and professional.
4. Use ONLY real facts from the user's data; do not invent experience.
5. End with a sign-off using the user's name when it is known."""

CREATE_RESUME_PROMPT = PromptTemplate.from_template(
    """{rules}

## Template To Follow
{template}
{user_data}
===== JOB REQUIREMENTS =====
{instruction}
Tailor the resume to match these requirements.
===== END =====

Generate the final LaTeX resume now."""
)

CREATE_EMAIL_PROMPT = PromptTemplate.from_template(
    """{rules}
{user_data}
===== REQUEST =====
{instruction}
===== END =====

Write the email now."""
)

EDIT_PROMPT = PromptTemplate.from_template(
    """{rules}

Current {target_label}:
{current_markup}

Instruction:
{instruction}
{extra_context}
Apply the instruction and return the FULL updated {target_label}, not a diff.

Return STRICT JSON only:
{{
  "content": "the full updated {target_label}",
  "summary": "a short description of what changed"
}}"""
)

REPAIR_DIRECTIVE = (
    "Fix the errors reported by the compiler so the document compiles. "
    "Preserve the existing structure, sections and content. "
    "Do not add packages or custom macros."
)

REPAIR_PROMPT = PromptTemplate.from_template(
    """{rules}

The following LaTeX failed to compile.

Compiler error:
{diagnostic}

Current LaTeX:
{current_markup}

{directive}
Return ONLY the corrected full LaTeX source."""
)
