"""Web search with canned results and an AI summary."""

import asyncio

from aistudio.engine.errors import WebSearchError
from aistudio.engine.facade import FeatureFacade
from aistudio.engine.runner import ProgressReporter
from aistudio.models import FeatureType, SearchInput, SearchResponse, SearchResult


def build_results(query: str) -> list[SearchResult]:
    """Five canned results: encyclopedia, news, guide, video, academic."""
    query = query.strip()
    clean = query.lower()
    title = query.title()
    underscored = clean.replace(" ", "_")
    hyphenated = clean.replace(" ", "-")

    return [
        SearchResult(
            title=f"{title} - Wikipedia",
            url=f"https://en.wikipedia.org/wiki/{underscored}",
            description=(
                f"Learn about {query} on Wikipedia, the free encyclopedia. {title} refers to "
                "a concept that has numerous applications and interpretations across "
                "different contexts."
            ),
        ),
        SearchResult(
            title=f"Latest News about {title}",
            url=f"https://news.example.com/topics/{hyphenated}",
            description=(
                f"Stay up-to-date with the latest news and developments related to {query}. "
                "Our comprehensive coverage includes analysis, expert opinions, and more."
            ),
        ),
        SearchResult(
            title=f"How to Understand {title}: A Complete Guide",
            url=f"https://howto.example.com/guides/{hyphenated}",
            description=(
                f"This comprehensive guide explains everything you need to know about {query}. "
                "Learn from experts and master the topic with our step-by-step instructions."
            ),
        ),
        SearchResult(
            title=f"{title} Explained - Video Series",
            url=f"https://videos.example.com/watch/{hyphenated}-explained",
            description=(
                f"Watch our video series that breaks down {query} into easy-to-understand "
                "concepts. Perfect for beginners and experts alike."
            ),
        ),
        SearchResult(
            title=f"Academic Papers on {title} - Research Database",
            url=f"https://academic.example.com/research/{underscored}",
            description=(
                f"Access peer-reviewed academic papers and research studies about {query}. "
                "Our database includes resources from top universities and research institutions."
            ),
        ),
    ]


def build_summary(query: str) -> str:
    return (
        f'Based on search results for "{query.strip()}", it appears to be a topic with both '
        "academic and practical applications. Multiple reliable sources provide information "
        "about it, including encyclopedia entries, news articles, and educational resources. "
        "For more detailed information, academic research papers are also accessible through "
        "specialized databases."
    )


class WebSearchFacade(FeatureFacade):
    feature = FeatureType.WEB_SEARCH
    error_cls = WebSearchError
    input_model = SearchInput

    def validate(self, input: SearchInput) -> None:
        if not input.query.strip():
            raise WebSearchError(WebSearchError.Kind.INVALID_QUERY)

    async def simulate(self, input: SearchInput, report: ProgressReporter) -> SearchResponse:
        report(0.1, "Searching")
        await asyncio.sleep(self.settings.simulated_delay(self.settings.simulated_search_delay_seconds))
        results = build_results(input.query)
        report(0.8, "Summarizing results")
        summary = build_summary(input.query) if results else None
        return SearchResponse(results=results, ai_summary=summary)
