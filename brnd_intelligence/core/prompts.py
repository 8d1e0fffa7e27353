# ==================================================
# SQL 生成 (Generator) 专用提示词
# ==================================================
GEN_SQL_SYSTEM = "You are an expert SQL analyst. Always respond with valid JSON."

GEN_SQL_PROMPT = """You are an expert SQL analyst for BRND, a brand voting platform.

DATABASE SCHEMA:
{schema}

IMPORTANT CONTEXT:
- Brand names in the database do NOT include @ symbol (e.g., "floc" not "@floc")
- When searching for brands, use LIKE '%brandname%' to be flexible
- Current date is {month_label} ({today})
- Date fields use DATETIME format
- For "this month", use: date >= '{month_start}'

TABLE RELATIONSHIPS & PURPOSE:
1. users: Stores profile data (fid, username, points). Linked to votes via userId.
2. brands: Stores brand info (name, categoryId). Linked to votes via brand1Id, brand2Id, brand3Id.
3. categories: Links to brands via categoryId.
4. user_brand_votes: The core voting table.
   - userId -> users.id
   - brand1Id, brand2Id, brand3Id -> brands.id (Top 3 choices)
   - date: When the vote happened.
5. user_daily_actions: Tracks bonus actions like sharing.

COMMON PATTERNS:
- To find votes for a brand, check brand1Id OR brand2Id OR brand3Id.
- To count total votes for a brand: COUNT(CASE WHEN brand1Id=b.id THEN 1 END) + ...
- To find user activity: JOIN user_brand_votes on users.id = userId.

SPECIAL QUERIES:
If the user asks for "BRND WEEK LEADERBOARD" or "weekly leaderboard", use this EXACT query:
SELECT
    b.name,
    b.imageUrl,
    b.channel,
    b.scoreWeek as score,
    COUNT(CASE WHEN v.brand1Id = b.id THEN 1 END) as gold,
    COUNT(CASE WHEN v.brand2Id = b.id THEN 1 END) as silver,
    COUNT(CASE WHEN v.brand3Id = b.id THEN 1 END) as bronze,
    COUNT(CASE WHEN v.brand1Id = b.id OR v.brand2Id = b.id OR v.brand3Id = b.id THEN 1 END) as totalVotes
FROM brands b
LEFT JOIN user_brand_votes v ON (v.brand1Id = b.id OR v.brand2Id = b.id OR v.brand3Id = b.id)
    AND v.date >= DATE_SUB(CURDATE(), INTERVAL 7 DAY)
WHERE b.banned = 0
GROUP BY b.id, b.name, b.imageUrl, b.channel, b.scoreWeek
ORDER BY b.scoreWeek DESC
LIMIT 10

For this query, set visualization type to "leaderboard" (special type).

If the user asks for "WEEKLY LEADERBOARD ANALYSIS" or mentions comparing rounds (e.g., "Round 23 vs Round 22"), use this query to get comprehensive data:
SELECT
    b.name,
    b.channel,
    b.scoreWeek as currentScore,
    b.score as totalScore,
    COUNT(CASE WHEN v.brand1Id = b.id THEN 1 END) as gold,
    COUNT(CASE WHEN v.brand2Id = b.id THEN 1 END) as silver,
    COUNT(CASE WHEN v.brand3Id = b.id THEN 1 END) as bronze,
    COUNT(CASE WHEN v.brand1Id = b.id OR v.brand2Id = b.id OR v.brand3Id = b.id THEN 1 END) as totalVotes
FROM brands b
LEFT JOIN user_brand_votes v ON (v.brand1Id = b.id OR v.brand2Id = b.id OR v.brand3Id = b.id)
    AND v.date >= DATE_SUB(CURDATE(), INTERVAL 7 DAY)
WHERE b.banned = 0
GROUP BY b.id, b.name, b.channel, b.scoreWeek, b.score
ORDER BY b.scoreWeek DESC
LIMIT 10

For this query, set visualization type to "analysis_post" (special type for generating social media posts).

RULES:
1. ONLY generate SELECT queries. Only use CREATE TEMPORARY TABLE for very complex multi-step calculations.
2. NEVER use: INSERT, UPDATE, DELETE, DROP, ALTER, TRUNCATE or permanent CREATE TABLE
3. Use descriptive aliases
4. Always add LIMIT 1000 (or lower)
5. Use JOINs when necessary. Remember a brand can be in brand1Id, brand2Id, OR brand3Id
6. Format dates in readable format
7. Use MySQL syntax

RESPOND WITH JSON ONLY:
{{
  "sql": "SELECT...",
  "explanation": "Brief explanation...",
  "visualization": {{
    "type": "bar" | "line" | "pie" | "area" | "table" | "number" | "leaderboard" | "analysis_post",
    "title": "Chart Title",
    "xAxisKey": "column_name_for_x_axis",
    "dataKey": "column_name_for_values",
    "description": "Why this chart was chosen"
  }}
}}

VISUALIZATION RULES:
- Use "line" for trends over time (dates, months).
- Use "bar" for comparing categories, brands, or users.
- Use "pie" for parts of a whole (percentages).
- Use "number" for a single aggregated value.
- Use "table" if data is just a list or doesn't fit a chart.
- xAxisKey MUST match a column name in the SQL result.
- dataKey MUST match a numerical column name in the SQL result.

USER QUESTION: {question}"""


# ==================================================
# 结果总结 (Analyst) 专用提示词
# ==================================================
DATA_SUMMARY_SYSTEM = "You are a friendly data analyst. Respond in {language}."

DATA_SUMMARY_PROMPT = """You are a data analyst presenting results to a marketing team.

ORIGINAL QUESTION: {question}

QUERY EXPLANATION: {explanation}

RESULTS ({row_count} rows):
{data_preview}
{more_rows}
Generate a concise, friendly summary of these results in {language}.
Include key insights and numbers.
Keep it under {max_words} words."""


ANALYSIS_POST_SYSTEM = "You are a professional content writer for BRND."

ANALYSIS_POST_PROMPT = """You are a professional content writer for BRND, a Web3 brand ranking platform on Farcaster/Base.

Generate a polished English analysis post for the Weekly Leaderboard comparing Round {current_round} vs Round {previous_round}.

CURRENT LEADERBOARD DATA (Round {current_round} - Top 10):
{data_preview}

REQUIRED STRUCTURE:

**TITLE**: "BRND Weekly {previous_round}-{current_round} Leaderboard Evolution"

**INTRO** (2-3 sentences):
- Mention this round set records in total votes and top score
- Build excitement about BRND V2 coming soon (BRND Power, new miniapp rewards)
- Keep it energetic but professional

**TOP 10 BRAND MOVEMENTS** (Round {current_round} vs {previous_round}):
For each brand, write ONE line with:
- Position and brand name with handle (e.g., "Base (@base.base.eth)")
- Current score with % change (e.g., "+3.3%")
- Podiums count with % change
- Brief insight (e.g., "setting all-time highs", "largest percentage jump", "staying stable")

**WEEKLY ECOSYSTEM INSIGHTS**:
- Calculate and show total podiums (sum of totalVotes from data)
- Calculate and show total points (sum of currentScore from data)
- Show comparison to previous week with % changes
- Highlight the growth trend

**ANALYSIS & TAKEAWAYS** (2-3 sentences):
- Highlight standout performers
- Connect to community engagement
- Tease BRND V2 launch

STYLE RULES:
- Professional but engaging tone
- Bold key metrics with **
- Use bullet points with dashes (-)
- NO emojis
- Write in clear, readable paragraphs
- Include specific numbers from the data
- Keep percentage changes realistic (between -25% and +130%)

Generate the complete analysis now:"""


# 兜底文案 (LLM 不可用时)，按 SUMMARY_LANGUAGE 选择，未知语言用西语
DEFAULT_LANGUAGE = "Spanish"

SUMMARY_FALLBACKS = {
    "Spanish": "Se encontraron {row_count} resultados. {explanation}",
    "English": "Found {row_count} results. {explanation}",
}

LEADERBOARD_HEADERS = {
    "Spanish": "Top 3 del BRND Week Leaderboard:",
    "English": "Top 3 of the BRND Week Leaderboard:",
}
