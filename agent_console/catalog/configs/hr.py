"""HR operations agent - benefits, pay rate changes, leave, unemployment claims."""

from agent_console.catalog.models import ActionDefinition, AgentDefinition, AgentStatus
from agent_console.catalog.prompts import SHARED_RULES
from agent_console.templates import procedural, prompt_handler, template


@prompt_handler("hr.enrollment_audit")
def enrollment_audit_prompt(data) -> str:
    lines = [
        f"- {e.get('name') or '[Employee]'}: hired {e.get('hireDate') or '[Date]'}, "
        f"{e.get('daysRemaining', '?')} days remaining, status: {e.get('status') or '[Unknown]'}"
        for e in data.get("enrollments") or []
    ] or ["- [No open enrollments provided]"]
    return (
        "Review the following open benefits enrollments and flag any issues:\n"
        + "\n".join(lines)
        + "\n\nFlag: approaching deadlines, missing steps, employees who need follow-up."
    )


hr_agent = AgentDefinition(
    key="hr",
    name="HR Agent",
    department="hr",
    status=AgentStatus.ACTIVE,
    model="claude-sonnet-4-20250514",
    system_prompt=f"""You are an HR operations assistant for a facility services company. You help HR coordinators process benefits enrollments, pay rate changes, leave of absence requests, and unemployment claims.

{SHARED_RULES}

HR-Specific Rules:
- Follow the company's SOPs exactly as documented. Do not improvise process steps.
- Generate actionable outputs: email drafts, system update instructions, compliance checklists, deadline summaries.
- Reference the company's HR systems when they appear in the knowledge base context.
- When generating system update instructions, specify: which section, which tab, which field, what value, what effective date.
- When drafting emails, use a respectful and supportive tone.""",
    knowledge_modules=(
        "Benefits Enrollment SOP",
        "Pay Rate Changes SOP",
        "Leave of Absence SOP",
        "Unemployment Claims SOP",
        "Union Pay Schedule 2026",
    ),
    actions={
        "draftReminder": ActionDefinition(
            label="Draft Reminder Email",
            description="Generate a benefits enrollment reminder for an employee",
            prompt_template=template(
                "Draft a benefits enrollment reminder email for ${data.employeeName}. "
                "They were hired on ${data.hireDate} and have ${data.daysRemaining} days remaining "
                "in their enrollment window. Keep it supportive and professional."
            ),
        ),
        "generateSystemUpdate": ActionDefinition(
            label="Generate System Update",
            description="Step-by-step HR system field update instructions",
            prompt_template=template(
                "Generate step-by-step HR system update instructions for: ${data.description}. "
                "Employee: ${data.employeeName}. Include the specific section, tab, field name, "
                "value to enter, and effective date. Be precise — HR coordinators will follow "
                "these instructions exactly."
            ),
        ),
        "checkUnionCompliance": ActionDefinition(
            label="Check Union Compliance",
            description="Validate pay rate change against union contract",
            prompt_template=template(
                "Check union compliance for a pay rate change: Employee ${data.employeeName}, "
                "current rate ${data.currentRate}, proposed rate ${data.proposedRate}, "
                "union: ${data.union}, effective date: ${data.effectiveDate}. Verify the proposed "
                "rate aligns with the contract schedule and flag any issues."
            ),
        ),
        "notifyOperations": ActionDefinition(
            label="Notify Operations",
            description="Draft supervisor/VP notification for approved leave",
            prompt_template=template(
                "Draft an operations notification for: ${data.employeeName} has been approved for "
                "${data.leaveType} from ${data.dates}. Include what the supervisor needs to know, "
                "staffing implications, and return-to-work expectations."
            ),
        ),
        "checkEligibility": ActionDefinition(
            label="Check Eligibility",
            description="Evaluate leave eligibility against FMLA/state criteria",
            prompt_template=template(
                "Evaluate leave eligibility for ${data.employeeName} requesting ${data.leaveType}. "
                "Employment dates: relevant. Check against FMLA requirements (12 months employed, "
                "1,250 hours) and applicable state leave laws. List what documentation is needed."
            ),
        ),
        "sendReminder": ActionDefinition(
            label="Send Reminder",
            description="Draft follow-up for overdue documents",
            prompt_template=template(
                "Draft a follow-up communication for ${data.employeeName} regarding overdue: "
                "${data.overdueItem}. Be supportive but clear about the deadline and consequences "
                "of non-submission. Offer to help if they're having difficulty."
            ),
        ),
        "runEnrollmentAudit": ActionDefinition(
            label="Run Enrollment Audit",
            description="Review all open enrollments and flag issues",
            prompt_template=procedural("hr.enrollment_audit"),
        ),
        "generateRateChangeBatch": ActionDefinition(
            label="Generate Rate Change Batch",
            description="Produce employee list and new rates for union contract",
            prompt_template=template(
                "Generate a rate change batch for: ${data.union}. Effective date: ${data.effectiveDate}. "
                "Current rate: ${data.currentRate}/hr. New rate: ${data.newRate}/hr. "
                "Employees affected: ${data.employeesAffected}. Produce a batch update checklist "
                "including: fields to update, effective date, any benefits or deduction impacts, "
                "and verification steps."
            ),
        ),
        "askAgent": ActionDefinition(
            label="Ask HR Agent",
            description="Open-ended HR operations question",
            prompt_template=template("${data.question}"),
        ),
    },
)
