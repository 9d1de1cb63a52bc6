# codearchitect/core/prompts.py
"""
Prompt builders for the four chat modes.

Each builder returns ``(prompt, system_instruction)``. All of them embed
the distilled project context and a short summary of the framework,
symbols and imports drawn from it.
"""

from dataclasses import dataclass
from typing import List, Tuple

from codearchitect.core.context.distiller import DistilledContext

Prompt = Tuple[str, str]


@dataclass
class ProjectState:
    """Snapshot handed to the mode handlers."""
    active_file: str
    context: DistilledContext

    @property
    def framework(self):
        return self.context.rich.framework

    @property
    def file_paths(self) -> List[str]:
        return list(self.context.files)

    def symbols(self, limit: int) -> str:
        return ", ".join(s.name for s in self.context.rich.symbols[:limit])

    def imports(self, limit: int) -> str:
        return ", ".join(self.context.rich.imports[:limit])

    def dependencies(self, limit: int) -> str:
        return ", ".join(list(self.context.rich.dependencies)[:limit])

    def framework_line(self) -> str:
        return f"{self.framework.type} {self.framework.version or ''}".rstrip()

    def features(self) -> str:
        return ", ".join(self.framework.features)


def ask_prompt(request: str, state: ProjectState) -> Prompt:
    kind = state.framework.type
    prompt = f"""You are an expert {kind} developer working in a {kind} project.

QUESTION: {request}

PROJECT CONTEXT:
- Framework: {state.framework_line()}
- Features: {state.features()}
- Active File: {state.active_file}
- Available Symbols: {state.symbols(20)}
- Key Imports: {state.imports(15)}

CODEBASE OVERVIEW:
{state.context.text}

Please provide a clear, actionable answer that takes into account the framework, existing code patterns, and project structure. Include relevant code examples when helpful."""
    system = (
        f"You are a senior {kind} developer with deep knowledge of this codebase. "
        "Answer questions with specific, actionable advice based on the provided context."
    )
    return prompt, system


def plan_prompt(request: str, state: ProjectState) -> Prompt:
    kind = state.framework.type
    prompt = f"""You are creating a detailed implementation plan for a {kind} project.

TASK TO IMPLEMENT: "{request}"

PROJECT ANALYSIS:
- Framework: {state.framework_line()}
- Current Architecture: {state.features()}
- Existing Symbols: {state.symbols(25)}
- Key Dependencies: {state.dependencies(10)}
- Active File: {state.active_file}
- Total Files: {len(state.file_paths)}

CODEBASE CONTEXT:
{state.context.text}

Create a comprehensive implementation plan that includes:
1. Project overview and requirements analysis
2. Architecture decisions and design patterns
3. File-by-file implementation breakdown
4. Dependencies and imports needed
5. Testing strategy and validation steps
6. Deployment considerations
7. Follow-up tasks and next steps

Format as a well-structured Markdown document with clear headings, code examples, and actionable steps."""
    system = (
        f"You are a senior {kind} architect creating a detailed implementation plan. "
        "Write a comprehensive, well-structured plan that covers all aspects of implementation."
    )
    return prompt, system


def plan_fallback_system(state: ProjectState) -> str:
    return (
        f"You are a senior {state.framework.type} architect. Create detailed, actionable "
        "implementation plans that leverage existing codebase patterns and follow framework conventions."
    )


def analysis_prompt(request: str, state: ProjectState) -> Prompt:
    kind = state.framework.type
    prompt = f"""You are analyzing a request for a {kind} project.

REQUEST: "{request}"

PROJECT INTELLIGENCE:
- Framework: {state.framework_line()}
- Architecture: {state.features()}
- Existing Code Patterns: {state.symbols(25)}
- Import Patterns: {state.imports(20)}
- Active Context: {state.active_file}
- Project Size: {len(state.file_paths)} files

CODEBASE ANALYSIS:
{state.context.text}

Analyze what the user wants to implement and provide technical requirements that fit seamlessly into this existing {kind} codebase. Consider the established patterns, naming conventions, and architectural decisions."""
    system = (
        f"You are a senior {kind} developer analyzing implementation requirements. "
        "Provide detailed technical specifications that align with existing codebase patterns."
    )
    return prompt, system


def code_prompt(request: str, requirements: str, state: ProjectState) -> Prompt:
    kind = state.framework.type
    prompt = f"""You are implementing: "{request}"

TECHNICAL REQUIREMENTS: {requirements}

FRAMEWORK CONTEXT: {state.framework_line()}
- Use {state.features()} patterns
- Follow existing code style in: {state.active_file}
- Leverage imports: {state.imports(15)}
- Reference symbols: {state.symbols(20)}

PROJECT STRUCTURE:
{", ".join(state.file_paths)}

CODEBASE CONTEXT:
{state.context.text}

Generate production-ready code that integrates seamlessly with this {kind} project. Use proper file naming conventions and create additional files as needed.

IMPORTANT: You can create and modify files directly. Use this format to create files:

[CREATE: filename.ext]
file content here
[/CREATE]

Or to modify existing files:

[MODIFY: filename.ext]
replacement content here
[/MODIFY]

Ensure all code follows {kind} best practices and matches the existing codebase style."""
    system = (
        f"You are an expert {kind} developer. Generate high-quality, production-ready code that "
        "perfectly integrates with the existing codebase. You have full file creation and modification capabilities."
    )
    return prompt, system


def debug_prompt(request: str, state: ProjectState) -> Prompt:
    kind = state.framework.type
    prompt = f"""You are debugging a {kind} application.

DEBUG REQUEST: "{request}"

CODE ANALYSIS CONTEXT:
- Framework: {state.framework_line()}
- Tech Stack: {state.features()}
- Code Symbols: {state.symbols(30)}
- Dependencies: {state.dependencies(15)}
- Active File: {state.active_file}

FULL CODEBASE CONTEXT:
{state.context.text}

Perform a comprehensive analysis to identify:
1. Syntax errors and logical bugs
2. Performance bottlenecks
3. Framework-specific issues
4. Best practice violations
5. Security concerns
6. Integration problems

Provide specific, actionable fixes with code examples that follow {kind} conventions. Explain the root cause and prevention strategies."""
    system = (
        f"You are an expert {kind} debugger with deep knowledge of the framework, common pitfalls, "
        "and best practices. Provide detailed, actionable debugging advice with specific code fixes."
    )
    return prompt, system
