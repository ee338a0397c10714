summary_template = """You are analyzing a YouTube video transcript to help viewers decide if it's worth watching.

Here is the transcript with timestamps:

{transcript}

Please analyze this transcript and provide:

1. A brief summary (2-3 sentences) of what this video is about and who would find it valuable.

2. The top 10 most important topics or key points discussed in the video. For each topic:
   - Give it a concise, descriptive title (5-8 words)
   - Write a brief description (1-2 sentences) explaining what is discussed
   - Identify the timestamp (in seconds) where this topic begins

Order the topics by their appearance in the video (chronologically), not by importance.

Respond ONLY with valid JSON in this exact format:
{{
  "summary": "Your 2-3 sentence summary here",
  "topics": [
    {{
      "title": "Topic Title Here",
      "description": "Brief description of what is discussed",
      "timestamp": 0
    }}
  ]
}}

Important:
- Extract at most 10 topics
- Timestamps should be in seconds (integers)
- Make titles specific and informative
- Focus on substantive content, not intros/outros unless they contain important information
"""

detailed_template = """You are analyzing a YouTube video transcript to help viewers decide if it's worth watching.

Video Title: {title}
Channel: {channel}
Duration: {duration}

Here is the transcript with timestamps:

{transcript}

Analyze this transcript and respond with ONLY valid JSON in this exact format:

{{
  "tldr": "2-3 sentences: what the video is about, its value to the viewer, and who should watch",
  "keyTopics": [
    "Standalone insight written as a complete thought"
  ],
  "chapters": [
    {{
      "timestamp": 0,
      "title": "Chapter title"
    }}
  ],
  "keyTakeaways": [
    "Specific lesson, quote, stat, or framework"
  ],
  "shouldWatch": "Brief recommendation: who should watch and who can skip"
}}

Rules:
- keyTopics: 5-8 points covering the major themes chronologically
- chapters: 6-12 chapters covering all major sections, timestamps in whole seconds
- keyTakeaways: 3-7 actionable insights
- Keep everything concise; write for speed reading
- Bold key phrases using **text** markdown
"""
