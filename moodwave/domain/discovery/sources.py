"""Fixed source lists behind the mixed-track endpoints."""

from .aggregator import SourceSpec

# Curated playlists per language
MIXED_HITS_SOURCES = [
    SourceSpec(kind="playlist", source_id="37i9dQZF1DXcBWIGoYBM5M", count=20, language="english"),
    SourceSpec(kind="playlist", source_id="37i9dQZF1DWSVl9DWKB8AR", count=15, language="punjabi"),
    SourceSpec(kind="playlist", source_id="37i9dQZF1DX0XUsuxWHRQd", count=15, language="hindi"),
]
MIXED_HITS_LIMIT = 50

MIXED_ARTIST_SOURCES = [
    SourceSpec(kind="artist", source_id="6eUKZXaKkcviH0Ku9w2n3V", name="Ed Sheeran", count=4, language="english"),
    SourceSpec(kind="artist", source_id="4YRxDV8wJFPHPTeXepOstw", name="Arijit Singh", count=7, language="hindi"),
    SourceSpec(kind="artist", source_id="5f4QpKfy7ptCHwTqspnSJI", name="Neha Kakkar", count=2, language="hindi"),
    SourceSpec(kind="artist", source_id="2FKWNmZWDBZR4dE5KX4plR", name="Diljit Dosanjh", count=7, language="punjabi"),
    SourceSpec(kind="artist", source_id="6cEuCEZuGdZg4X9UrhWZ1i", name="Yung Kai Blue", count=3, language="punjabi"),
]

MIXED_ALT_ARTIST_SOURCES = [
    SourceSpec(kind="artist", source_id="6eUKZXaKkcviH0Ku9w2n3V", name="Ed Sheeran", count=10, language="english"),
    SourceSpec(kind="artist", source_id="6cEuCEZuGdZg4X9UrhWZ1i", name="Yung Kai Blue", count=5, language="english"),
    SourceSpec(kind="artist", source_id="06HL4z0CvFAxyc27GXpf02", name="Taylor Swift", count=10, language="english"),
    SourceSpec(kind="artist", source_id="6M2wZ9GZgrQXHCFfjv46DL", name="Dua Lipa", count=8, language="english"),
    SourceSpec(kind="artist", source_id="1Xyo4u8uXC1ZmMpatF05PJ", name="The Weeknd", count=8, language="english"),
    SourceSpec(kind="artist", source_id="7iK8PXO48WeuP03g8YR51W", name="Billie Eilish", count=7, language="english"),
    SourceSpec(kind="artist", source_id="4V8Sr092nmH6rQvmV0d3zF", name="Post Malone", count=7, language="english"),
    SourceSpec(kind="artist", source_id="0C8ZW7ezQVs4urJTLi2c5B", name="Coldplay", count=6, language="english"),
    SourceSpec(kind="artist", source_id="6KImCVD70vtIoJWnq6nGn3", name="Harry Styles", count=6, language="english"),
    SourceSpec(kind="artist", source_id="4YRxDV8wJFPHPTeXepOstw", name="Arijit Singh", count=10, language="hindi"),
    SourceSpec(kind="artist", source_id="0oOet2f43PA68X5RxKobEy", name="Shreya Ghoshal", count=8, language="hindi"),
    SourceSpec(kind="artist", source_id="5f4QpKfy7ptCHwTqspnSJI", name="Neha Kakkar", count=7, language="hindi"),
    SourceSpec(kind="artist", source_id="2FKWNmZWDBZR4dE5KX4plR", name="Diljit Dosanjh", count=8, language="punjabi"),
    SourceSpec(kind="artist", source_id="4PULA4EFzYTrxYvOVlwpiQ", name="Sidhu Moosewala", count=7, language="punjabi"),
    SourceSpec(kind="artist", source_id="5XacWe2kM6K9G2QJ1q8u0E", name="Satinder Sartaaj", count=7, language="punjabi"),
    SourceSpec(kind="artist", source_id="6gBhqjKxay1g6pDm1c4G1e", name="Karan Aujla", count=7, language="punjabi"),
    SourceSpec(kind="artist", source_id="0GF4shudTAFv8ak9eWdd4Y", name="Kishore Kumar", count=6, language="hindi"),
    SourceSpec(kind="artist", source_id="1mYsTxnqsietFxj1OgoGbG", name="A.R. Rahman", count=6, language="hindi"),
]
MIXED_ALT_LIMIT = 50

# Artists whose top-tracks listing is often empty in the default market
FALLBACK_ARTIST_NAMES = {
    "5XacWe2kM6K9G2QJ1q8u0E": "Satinder Sartaaj",
    "6gBhqjKxay1g6pDm1c4G1e": "Karan Aujla",
    "5T2Qp1HkQJ9QY9Q5Q5Q5Q5": "Mohammed Rafi",
    "1dRPPaUIU9UqWQY3hQ5Q5q": "Lata Mangeshkar",
}
