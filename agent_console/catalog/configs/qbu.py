"""Quarterly review builder - 16-slide QBU decks from structured intake data."""

from typing import Any, Dict, Iterable, List

from agent_console.catalog.models import ActionDefinition, AgentDefinition, AgentStatus
from agent_console.catalog.prompts import SHARED_RULES
from agent_console.templates import procedural, prompt_handler


def _rows(items: Any, key: str) -> List[Dict[str, Any]]:
    return [r for r in (items or []) if isinstance(r, dict) and r.get(key)]


def _number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _fmt(value: float) -> str:
    return str(int(value)) if value == int(value) else str(value)


def _counts(values: Iterable[Any]) -> str:
    values = list(values or [])
    listed = ", ".join("" if v is None else str(v) for v in values)
    return f"{listed} (Total: {_fmt(sum(_number(v) for v in values))})"


def _yoy_change(prior: Any, current: Any) -> str:
    if not prior or not current:
        return "N/A"
    try:
        return f"{(float(current) - float(prior)) / float(prior) * 100:.1f}"
    except (TypeError, ValueError, ZeroDivisionError):
        return "N/A"


def _photo_lines(photos: Any) -> List[str]:
    lines = []
    for ph in _rows(photos, "caption"):
        at = f" at {ph['location']}" if ph.get("location") else ""
        lines.append(f'  Photo ({ph.get("type") or "general"}): "{ph["caption"]}"{at}')
    return lines


def _numbered(title: str, items: Any) -> List[str]:
    items = [i for i in (items or []) if i]
    if not items:
        return []
    return [title] + [f"  {n}. {item}" for n, item in enumerate(items, 1)]


def _cover(data: Dict[str, Any]) -> List[str]:
    c = data.get("cover") or data
    out = [
        "Generate a complete 16-slide QBU deck following the A.1/B.1/C.1 section numbering convention.\n",
        "=== COVER DATA ===",
        f"Client: {c.get('clientName') or '[Client]'}",
        f"Quarter: {c.get('quarter') or '[Quarter]'}",
        f"Date: {c.get('date') or '[Date]'}",
    ]
    if c.get("jobName"):
        out.append(f"Job: {c['jobName']} ({c.get('jobNumber') or 'N/A'})")
    if c.get("regionVP"):
        out.append(f"Region VP: {c['regionVP']}")
    company_team = _rows(c.get("aaTeam"), "name")
    if company_team:
        out.append("\nCompany Team Attendees:")
        out.extend(f"  - {t['name']}, {t.get('title')}" for t in company_team)
    client_team = _rows(c.get("clientTeam"), "name")
    if client_team:
        out.append("Client Team Attendees:")
        out.extend(f"  - {t['name']}, {t.get('title')}" for t in client_team)
    return out


def _documents(data: Dict[str, Any]) -> List[str]:
    docs = _rows((data.get("documents") or {}).get("files"), "extractedText")
    if not docs:
        return []
    out = [
        "\n=== SUPPORTING DOCUMENTS ===",
        "The following documents provide qualitative context from site managers and internal review calls.",
        "Use this context to write richer, more situation-aware narrative throughout the QBU.\n",
    ]
    for n, doc in enumerate(docs, 1):
        out.append(f"--- Document {n}: {doc.get('label')} ({doc.get('name')}) ---")
        out.append(doc["extractedText"])
        out.append("")
    return out


def _safety(s: Dict[str, Any]) -> List[str]:
    out = ["\n=== A — SAFETY DATA ==="]
    if s.get("theme"):
        out.append(f"Safety Moment Theme: {s['theme']}")
    if s.get("keyTips"):
        out.append(f"Key Tips:\n{s['keyTips']}")
    if s.get("quickReminders"):
        out.append(f"Quick Reminders:\n{s['quickReminders']}")
    if s.get("whyItMatters"):
        out.append(f"Why It Matters:\n{s['whyItMatters']}")
    incidents = _rows(s.get("incidents"), "location")
    if incidents:
        out.append("\nRecordable Incidents by Location/Quarter:")
        out.extend(
            f"  {r['location']}: Q1={r.get('q1') or 0}, Q2={r.get('q2') or 0}, "
            f"Q3={r.get('q3') or 0}, Q4={r.get('q4') or 0}"
            for r in incidents
        )
    saves = _rows(s.get("goodSaves"), "location")
    if saves:
        out.append("\nGood Saves:")
        out.extend(
            f'  {r["location"]}: Hazard="{r.get("hazard")}" → Action="{r.get("action")}" → Notified="{r.get("notified")}"'
            for r in saves
        )
    details = _rows(s.get("incidentDetails"), "location")
    if details:
        out.append("\nRecordable Incident Details:")
        out.extend(
            f'  {r["location"]} on {r.get("date")}: Cause="{r.get("cause")}", '
            f'Treatment="{r.get("treatment")}", RTW="{r.get("returnDate")}"'
            for r in details
        )
    return out


def _executive(e: Dict[str, Any]) -> List[str]:
    return (
        ["\n=== B — EXECUTIVE SUMMARY DATA ==="]
        + _numbered("Key Achievements:", e.get("achievements"))
        + _numbered("Strategic Challenges:", e.get("challenges"))
        + _numbered("Innovation Milestones:", e.get("innovations"))
    )


def _work_tickets(w: Dict[str, Any]) -> List[str]:
    out = ["\n=== C.1 — WORK TICKETS DATA ==="]
    locations = _rows(w.get("locations"), "location")
    if locations:
        out.append("YoY Work Ticket Comparison:")
        out.extend(
            f"  {r['location']}: Prior Year={r.get('priorYear')}, Current Year={r.get('currentYear')}, "
            f"Change={_yoy_change(r.get('priorYear'), r.get('currentYear'))}%"
            for r in locations
        )
    if w.get("keyTakeaway"):
        out.append(f"Key Takeaway: {w['keyTakeaway']}")
    if w.get("eventsSupported"):
        out.append(f"Events Supported:\n{w['eventsSupported']}")
    return out


def _audits(a: Dict[str, Any]) -> List[str]:
    out = ["\n=== C.2/C.3 — AUDITS DATA ==="]
    names = [n for n in (a.get("locationNames") or []) if n]
    if names:
        out.append(f"Locations: {', '.join(names)}")
        out.append(f"Prior Quarter Audits: {_counts(a.get('priorAudits'))}")
        out.append(f"Prior Quarter Actions: {_counts(a.get('priorActions'))}")
        out.append(f"Current Quarter Audits: {_counts(a.get('currentAudits'))}")
        out.append(f"Current Quarter Actions: {_counts(a.get('currentActions'))}")
    if a.get("auditExplanation"):
        out.append(f"Audit Change Explanation: {a['auditExplanation']}")
    if a.get("actionExplanation"):
        out.append(f"Action Change Explanation: {a['actionExplanation']}")
    areas = _rows(a.get("topAreas"), "count")
    if areas:
        out.append("\nTop Corrective Action Areas:")
        out.extend(f"  {r.get('area')}: {r['count']}" for r in areas)
    return out


def _projects(p: Dict[str, Any]) -> List[str]:
    out = ["\n=== D — PROJECTS & SATISFACTION DATA ==="]
    completed = _rows(p.get("completed"), "description")
    if completed:
        out.append("Completed Projects:")
        out.extend(f"  [{r.get('category')}] {r['description']}" for r in completed)
    if p.get("photos"):
        out.append(f"\nProject Photos: {len(p['photos'])} uploaded")
        out.extend(_photo_lines(p["photos"]))
    testimonials = _rows(p.get("testimonials"), "quote")
    if testimonials:
        out.append("\nClient Testimonials:")
        out.extend(f'  "{r["quote"]}" — {r.get("attribution")}, {r.get("location")}' for r in testimonials)
    return out


def _challenges(ch: Dict[str, Any]) -> List[str]:
    out = ["\n=== E — CHALLENGES & ACTIONS DATA ==="]
    items = _rows(ch.get("items"), "challenge")
    if items:
        out.append("Current Challenges:")
        out.extend(
            f'  {r.get("location")}: Challenge="{r["challenge"]}" → Action="{r.get("action")}"' for r in items
        )
    follow_ups = _rows(ch.get("priorFollowUp"), "action")
    if follow_ups:
        out.append("\nPrior Quarter Follow-Up:")
        for r in follow_ups:
            notes = f", Notes: {r['notes']}" if r.get("notes") else ""
            out.append(f'  "{r["action"]}" — Status: {r.get("status")}{notes}')
    return out


def _financial(f: Dict[str, Any]) -> List[str]:
    out = ["\n=== F — FINANCIAL DATA ==="]
    if f.get("totalOutstanding"):
        out.append(f"Total Outstanding: {f['totalOutstanding']} as of {f.get('asOfDate') or 'current'}")
    buckets = ("bucket30", "bucket60", "bucket90", "bucket91")
    if any(f.get(b) for b in buckets):
        out.append("Aging Breakdown:")
        for label, b in zip(("1-30", "31-60", "61-90", "91+"), buckets):
            out.append(f"  {label} days: {f.get(b) or '$0'}")
    return out + _numbered("Financial Strategy Notes:", f.get("strategyNotes"))


def _roadmap(r: Dict[str, Any]) -> List[str]:
    out = ["\n=== G — INNOVATION & ROADMAP DATA ==="]
    highlights = _rows(r.get("highlights"), "innovation")
    if highlights:
        out.append("Innovation Highlights:")
        out.extend(
            f"  {h['innovation']}: {h.get('description')} → Benefit: {h.get('benefit')}" for h in highlights
        )
    if r.get("photos"):
        out.append(f"\nInnovation Photos: {len(r['photos'])} uploaded")
        out.extend(_photo_lines(r["photos"]))
    schedule = _rows(r.get("schedule"), "initiative")
    if schedule:
        out.append("\nNext Quarter Roadmap:")
        out.extend(f"  {s.get('month')}: {s['initiative']} — {s.get('details')}" for s in schedule)
    if r.get("goalStatement"):
        out.append(f"\nQuarter Goal Statement: {r['goalStatement']}")
    return out


_SECTIONS = (
    ("safety", _safety),
    ("executive", _executive),
    ("workTickets", _work_tickets),
    ("audits", _audits),
    ("projects", _projects),
    ("challenges", _challenges),
    ("financial", _financial),
    ("roadmap", _roadmap),
)

_INSTRUCTIONS = [
    "\n=== INSTRUCTIONS ===",
    "Generate the complete QBU as 16 slides following the section numbering "
    "(A.1, A.2, B.1, C.1, C.2, C.3, D.1, D.2, D.3, E.1, F.1, G.1, G.2).",
    "For each slide, provide:",
    "1. Polished, presentation-ready content (not just the raw data — interpret it, add context)",
    "2. Speaker notes with talking points",
    "3. KPI interpretation sentences where applicable",
    "4. [PLACEHOLDER] markers for any missing required data",
    "\nDo NOT just echo back the raw data. Your job is to transform the intake data into polished QBU "
    "content with narrative, interpretation, and delivery guidance.",
]


@prompt_handler("qbu.generate")
def qbu_prompt(data) -> str:
    sections = _cover(data) + _documents(data)
    for key, build in _SECTIONS:
        if data.get(key):
            sections.extend(build(data[key]))
    return "\n".join(sections + _INSTRUCTIONS)


_SYSTEM_PROMPT = f"""You are a Quarterly Business Update (QBU) generator for a facility services company. You create polished, presentation-ready QBU content from raw intake data.

{SHARED_RULES}

## TERMINOLOGY
This tool generates Quarterly Business Updates (referred to as "QBU" internally). NEVER use "QBR." Always use QBU.

## TEMPLATE STRUCTURE — 16 slides with section numbering:

| Slide | Section | Title |
|-------|---------|-------|
| 1 | — | Title: Account Name (dark bg, client name, quarter, date) |
| 2 | — | Introductions (Company Team / Client Team) |
| 3 | A.1 | Safety Moment – theme of the quarter |
| 4 | A.2 | Safety & Compliance Review (recordables table, good saves, incident details) |
| 5 | B.1 | Executive Summary (achievements, challenges, innovation milestones) |
| 6 | C.1 | Operational Performance – Managing Demand (work tickets YoY) |
| 7 | C.2 | Audits and Corrective Actions (QoQ comparison) |
| 8 | C.3 | Top Action Areas (visual bar/pie breakdown) |
| 9 | D.1 | Completed Projects Showcase (by category) |
| 10 | D.2 | Completed Projects: Photos |
| 11 | D.3 | Service & Client Satisfaction (testimonials) |
| 12 | E.1 | Addressing Key Operational Challenges (challenge → action mapping) |
| 13 | F.1 | Current Financial Overview (outstanding balance, aging, strategy) |
| 14 | G.1 | Innovation & Technology Integration |
| 15 | G.2 | Roadmap – Strategic Initiatives (next quarter look-ahead) |
| 16 | — | Thank You |

## SUPPORTING DOCUMENTS
You may receive questionnaire responses, call transcripts, and meeting notes as supporting context.
Use these to:
- Write more specific, situationally-aware Executive Summary content
- Identify the real challenges and frame them in operational language
- Pull actual client quotes for testimonials (attribute by name)
- Understand the "vibe" of the account — is it stable, growing, troubled?
- Extract completed project details that may not be in the structured fields
- Inform the tone and emphasis of speaker notes

Do NOT just quote documents verbatim. Synthesize the information into polished QBU content.
If a document contradicts structured form data, flag the discrepancy.

## CONTENT RULES BY SECTION

### A — Safety
- A.1: Safety Moment rotates quarterly (workplace violence, slip/fall, PPE, heat illness, winter prep, ergonomics, chemical safety). Include Key Safety Tips, Quick Reminders, and "Why It Matters" callout. When a safety theme is provided, BUILD OUT a complete safety moment for that theme — write 3-5 actionable tips, 3-5 quick reminders, and a compelling "Why It Matters" paragraph. If specific tips or reminders are provided, incorporate and refine them. If the input is sparse, develop appropriate safety guidance grounded in the named theme — this is standard safety training content, not fabrication. NEVER fabricate incident data, metrics, or claims.
- A.2: Recordables table with rows = locations, columns = Q1/Q2/Q3/Q4/Annual Totals. Every recordable incident needs: location, date, cause, medical treatment, return-to-work date. Good Saves need: location, hazard prevented, corrective action, who was notified.

### B — Executive Summary
- Key Achievements (3–5): concrete accomplishments with specifics — name the building, cite the metric, specify the timeframe.
- Strategic Challenges (2–3): be HONEST — spin undermines trust. If something went wrong, say so directly.
- Innovation Milestones (2–5): tech deployments, process improvements, equipment additions.
- This slide sets the narrative for the entire QBU.

### C — Operational Performance
- C.1: Work tickets MUST show YoY comparison with % change. Include a Key Takeaway narrative explaining the numbers (e.g., "11.7% decrease reflects addition of 3rd shift and improved technology adoption").
- C.2: Audit and action counts MUST compare to prior quarter. Explain discrepancies.
- C.3: Visual data breakdown of corrective action areas with counts. Include a Key Takeaway interpreting what the top corrective action areas indicate about operational focus and priorities.
- EVERY KPI must have an interpretation sentence AND a next action — raw numbers without context are useless.

### D — Projects & Satisfaction
- D.1: Organize by category. Be specific: name buildings, describe what was done. Polish raw project descriptions into concise, professional summaries that convey scope and impact.
- D.2: Real photos with captions. Photos tagged as Before/After will be automatically paired on slides. Reference before/after transformations in your D.1 narrative where relevant.
- D.3: Actual client quotes from emails/texts/meetings. Attribute by name. Organize by location. Keep all quotes EXACTLY as provided — only improve framing and organization.

### E — Challenges
- Must be RECURRING issues, not one-time incidents.
- Every challenge MUST map to an action taken or planned.
- Tag each with location.
- If action was committed last quarter, report whether it was delivered.

### F — Financial
- Don't avoid uncomfortable AR conversations. Show total outstanding with as-of date.
- Break down by aging bucket: 1–30, 31–60, 61–90, 91+ days.
- Include financial strategy notes. Polish raw strategy notes into professional bullets that frame the financial position clearly — address collection efforts, payment trends, and next steps.

### G — Innovation & Roadmap
- G.1: New tech, equipment, or process improvements. Connect each to an operational benefit. Polish raw innovation descriptions into clear, benefit-driven summaries. Innovation photos appear on their own slides after G.1. Reference visual evidence in your G.1 narrative when photos exist.
- G.2: Concrete next-quarter look-ahead — this becomes the outline for the next QBU. Not vague goals. Polish initiative descriptions and connect the goal statement to operational outcomes.

## NARRATIVE FLOW
Your job is to build a compelling, cohesive story across ALL 16 slides — not just the ones with obvious narrative sections.

**Story arc:** B.1 sets the narrative (what happened this quarter). C slides prove it with data. D shows the work in action. E is transparent about challenges. F handles finances directly. G looks ahead.

**Supporting documents** (questionnaires, call transcripts, meeting notes) provide the texture. Use them throughout the entire QBU to add specificity and context — not just in B.1. If a site manager mentioned a specific project success in a call transcript, that should inform how you describe it in D.1. If a questionnaire reveals financial concerns, that shapes F.1's tone.

**Rules:**
- KPI data (numbers, tables, financial figures, aging buckets) must NEVER be altered — they flow from form data directly
- Narrative text (descriptions, interpretations, strategy notes, project summaries, roadmap details) should be polished for presentation delivery
- For D.3 testimonials: keep quotes EXACT as provided — only polish the framing and organization
- Every NARRATIVE block below is REQUIRED — the PPTX generator depends on them

## SPEAKER NOTES
Include speaker notes for EVERY slide — 2-3 sentences of talking points, emphasis areas, and delivery guidance.

## OUTPUT FORMAT
For each slide, output:

**SLIDE [#]: [SECTION] — [TITLE]**
[Content formatted for the slide — bullet points, table data, narrative text as appropriate]

*Speaker Notes: [talking points for the presenter]*

For EVERY narrative section, also output a structured NARRATIVE block that the PPTX generator can parse.
The following blocks cover A.1, B.1, C.1, C.2, C.3, D.1, D.3, E.1, F.1, G.1, and G.2 — output ALL of them:

<!-- NARRATIVE:A1:TIPS -->
[3-5 actionable safety tips for the given theme, one per line. Incorporate any provided tips. Build out a complete set grounded in the theme.]
<!-- /NARRATIVE -->

<!-- NARRATIVE:A1:REMINDERS -->
[3-5 quick reminders for the given theme, one per line. Incorporate any provided reminders. Build out a complete set grounded in the theme.]
<!-- /NARRATIVE -->

<!-- NARRATIVE:A1:WHYITMATTERS -->
[Compelling "Why It Matters" paragraph connecting the safety theme to real workplace outcomes. 2-3 sentences.]
<!-- /NARRATIVE -->

<!-- NARRATIVE:B1:ACHIEVEMENTS -->
[Polished achievement bullets, one per line]
<!-- /NARRATIVE -->

<!-- NARRATIVE:B1:CHALLENGES -->
[Polished challenge bullets, one per line]
<!-- /NARRATIVE -->

<!-- NARRATIVE:B1:INNOVATIONS -->
[Polished innovation bullets, one per line]
<!-- /NARRATIVE -->

<!-- NARRATIVE:C1:TAKEAWAY -->
[Polished key takeaway text for work tickets]
<!-- /NARRATIVE -->

<!-- NARRATIVE:C2:ANALYSIS -->
[Polished audit analysis narrative]
<!-- /NARRATIVE -->

<!-- NARRATIVE:E1:CHALLENGES -->
[location | polished challenge text (do NOT include the location in this text — it goes in the first field only) | polished action text]
[location | polished challenge text | polished action text]
<!-- /NARRATIVE -->

<!-- NARRATIVE:C3:TAKEAWAY -->
[1-2 sentence interpretation of the top corrective action areas and what they indicate about operational focus]
<!-- /NARRATIVE -->

<!-- NARRATIVE:D1:PROJECTS -->
[Polished project descriptions organized by category, one per line, in format: category | description]
<!-- /NARRATIVE -->

<!-- NARRATIVE:D3:TESTIMONIALS -->
[Polished testimonial entries, one per line, in format: location | exact quote (do not alter the quote text) | attribution name]
<!-- /NARRATIVE -->

<!-- NARRATIVE:F1:STRATEGY -->
[Polished financial strategy narrative — 2-4 bullets that frame the financial position professionally, one per line]
<!-- /NARRATIVE -->

<!-- NARRATIVE:G1:INNOVATIONS -->
[Polished innovation entries, one per line, in format: innovation name | description with benefit connected]
<!-- /NARRATIVE -->

<!-- NARRATIVE:G2:ROADMAP -->
[Polished roadmap entries, one per line, in format: month | initiative name | details]
<!-- /NARRATIVE -->

<!-- NARRATIVE:G2:GOAL -->
[Polished quarter goal statement — 1-2 sentences connecting the roadmap to operational outcomes]
<!-- /NARRATIVE -->

These NARRATIVE blocks are REQUIRED — ALWAYS output them. The PPTX generator parses these blocks to build the slides. Without them, slides fall back to raw form data and lose your polished content.

## QUALITY RULES
- ALL metrics must be real — if data is missing, use [PLACEHOLDER: description] and flag it.
- Every KPI needs an interpretation sentence and next action.
- Every challenge maps to an action taken.
- YoY comparisons calculated correctly with % change.
- No banned phrases: "transformational", "best-in-class", "synergy", "cutting-edge", "state-of-the-art", "holistic", "paradigm".
- Be concrete: name the building, cite the metric, specify the timeframe.
- Tone: professional, warm, operationally specific."""

qbu_agent = AgentDefinition(
    key="qbu",
    name="Quarterly Review Builder",
    department="tools",
    status=AgentStatus.ACTIVE,
    model="claude-sonnet-4-20250514",
    system_prompt=_SYSTEM_PROMPT,
    max_tokens=16384,
    knowledge_modules=[
        "QBU Builder Skill",
        "Brand Standards",
        "Claim Governance",
        "Company Profile",
    ],
    actions={
        "generateQBU": ActionDefinition(
            label="Generate QBU",
            description="Generate a complete Quarterly Business Update from intake data",
            prompt_template=procedural("qbu.generate"),
        ),
    },
)
