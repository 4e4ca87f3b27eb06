"""
Sales Summary Extractor
Asks the Groq model for a written analysis of attendance and sales exports
and validates the JSON it returns.
"""
import json
import logging

from config import GROQ_MODEL, DEFAULT_TEMPERATURE, SUMMARY_MAX_TOKENS, SUMMARY_LANGUAGE
from errors import SummaryError
from models import IndividualHighlight, SalesSummary
from utils.api_client import is_rate_limit_error

logger = logging.getLogger(__name__)

ANALYST_PROMPT = """You are a friendly and insightful senior sales performance analyst for a retail store.
Your task is to analyze the performance data below and produce a summary with highlights and practical recommendations.
The period covered by the reports is: {date_range}.

Glossary:
- "At." means attendances: direct interactions with a customer.
- "Pot." means potentials: additional sales opportunities (companions).
- "Vendas" is the number of sales transactions.
- "Total Vendas" is the total revenue.
- "PA" is items per sale.
- "Bilhete Médio" is the average ticket (revenue per sale).

Focus on:
1. Unifying the data by salesperson name.
2. Conversion rate (sales / attendances) for each salesperson. This is the MOST IMPORTANT metric.
3. Who leads in conversion, revenue and attendances, and whether high attendance correlates with conversion or revenue.
4. Discrepancies: many attendances with low conversion, or few sales with a very high average ticket.
5. Opportunity ratio: potentials per attendance.

For EACH salesperson present in the data, write one sentence with their main strength or clearest improvement area.
"""

ATTENDANCE_SECTION = """
ATTENDANCE data:
```csv
{attendance_csv}
```
"""

SALES_SECTION = """
SALES data:
```csv
{sales_csv}
```
"""

SINGLE_CSV_SECTION = """
Performance data:
```csv
{csv_data}
```
"""

OUTPUT_INSTRUCTIONS = """
Write every text value in {language}.

Return ONLY valid JSON in this format:
{{
  "summary": "3-5 sentence overview, encouraging tone",
  "highlights": ["3-4 key observations"],
  "recommendations": ["2-3 specific, actionable recommendations"],
  "individualHighlights": [
    {{"salesperson": "Name", "highlight": "One sentence"}}
  ]
}}"""


def build_summary_prompt(date_range, csv_data=None, attendance_csv=None, sales_csv=None):
    """
    Build the analysis prompt.

    Two input shapes are accepted: a single combined CSV (csv_data), or
    separate attendance and sales CSVs.

    Raises:
        SummaryError: no data was given
    """
    prompt = ANALYST_PROMPT.format(date_range=date_range or "not informed")

    if attendance_csv or sales_csv:
        if attendance_csv:
            prompt += ATTENDANCE_SECTION.format(attendance_csv=attendance_csv)
        if sales_csv:
            prompt += SALES_SECTION.format(sales_csv=sales_csv)
    elif csv_data:
        prompt += SINGLE_CSV_SECTION.format(csv_data=csv_data)
    else:
        raise SummaryError("There is no data to analyze.")

    return prompt + OUTPUT_INSTRUCTIONS.format(language=SUMMARY_LANGUAGE)


def _string_list(value, field_name):
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise SummaryError(f"The AI response has an invalid '{field_name}' list.")
    return [item.strip() for item in value if item.strip()]


def parse_summary_response(response_text):
    """
    Parse and validate the model's JSON answer.

    Returns:
        SalesSummary

    Raises:
        SummaryError: no JSON object, or required fields missing/mistyped
    """
    response_text = (response_text or "").strip()

    # Clean markdown formatting if present
    if "```json" in response_text:
        response_text = response_text.split("```json")[1].split("```")[0]

    start = response_text.find('{')
    end = response_text.rfind('}') + 1
    if start == -1 or end <= start:
        raise SummaryError("The AI could not generate insights for this data.")

    try:
        data = json.loads(response_text[start:end])
    except json.JSONDecodeError as e:
        raise SummaryError(f"The AI returned invalid JSON: {e}") from e

    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise SummaryError("The AI response has no summary.")

    individual = []
    for item in data.get("individualHighlights") or []:
        if isinstance(item, dict) and item.get("salesperson") and item.get("highlight"):
            individual.append(IndividualHighlight(str(item["salesperson"]), str(item["highlight"])))

    return SalesSummary(
        summary=summary.strip(),
        highlights=_string_list(data.get("highlights", []), "highlights"),
        recommendations=_string_list(data.get("recommendations", []), "recommendations"),
        individual_highlights=individual,
    )


def summarize_performance(client, date_range, attendance_csv=None, sales_csv=None, csv_data=None):
    """
    Generate the AI insights for the loaded data.

    Args:
        client: Groq client instance
        date_range: Human-readable period label
        attendance_csv / sales_csv: Raw CSV contents, or
        csv_data: a single combined CSV

    Returns:
        SalesSummary

    Raises:
        SummaryError: the request failed or the answer was unusable.
        Rate-limit errors are re-raised untouched so the key fallback can retry.
    """
    prompt = build_summary_prompt(date_range, csv_data=csv_data, attendance_csv=attendance_csv, sales_csv=sales_csv)

    try:
        response = client.chat.completions.create(
            model=GROQ_MODEL,
            messages=[{"role": "user", "content": prompt}],
            temperature=DEFAULT_TEMPERATURE,
            max_tokens=SUMMARY_MAX_TOKENS
        )
        response_text = response.choices[0].message.content
    except Exception as e:
        if is_rate_limit_error(e):
            raise
        logger.warning("Summary request failed: %s", e)
        raise SummaryError(f"The AI service is unavailable: {e}") from e

    return parse_summary_response(response_text)
