from jinja2 import BaseLoader, Environment


ARTICLES_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ site_name }} Title Aggregator</title>
  <style>
    body {
      font-family: Georgia, serif; max-width: 1000px; margin: 0 auto;
      padding: 20px; background: #fff; color: #000; line-height: 1.6;
    }
    h1 {
      text-align: center; border-bottom: 2px solid #000;
      padding-bottom: 10px; margin-bottom: 30px; font-size: 2.2em;
    }
    .article { margin-bottom: 20px; padding: 15px 0; border-bottom: 1px solid #ccc; }
    .article:last-child { border-bottom: none; }
    .article-title { font-size: 1.1em; margin-bottom: 5px; }
    .article-title a { color: #000; text-decoration: none; font-weight: bold; }
    .article-title a:hover { text-decoration: underline; }
    .article-date { font-size: .9em; color: #666; font-style: italic; }
    .stats {
      text-align: center; margin-bottom: 30px; padding: 15px;
      background: #f5f5f5; border: 1px solid #ddd;
    }
    .button-container, .year-filter { text-align: center; margin: 20px 0; }
    .btn {
      display: inline-block; width: 150px; margin: 5px; padding: 10px;
      background: #000; color: #fff; text-align: center; text-decoration: none;
      border: none; cursor: pointer; font-size: 14px;
    }
    .btn:hover { background: #333; }
    .btn-secondary { background: #666; }
    .btn-secondary:hover { background: #888; }
    .empty { text-align: center; font-style: italic; color: #666; }
    .year-filter button {
      margin: 0 5px; padding: 5px 15px; background: #f0f0f0;
      border: 1px solid #ccc; cursor: pointer;
    }
    .year-filter button.active { background: #333; color: #fff; }
  </style>
</head>
<body>
  <h1>{{ site_name }} Title Aggregator</h1>

  <div class="stats">
    <p><strong>{{ articles|length }}</strong> articles found from {{ cutoff_date.strftime('%B %d, %Y') }} onwards</p>
    <p>Last updated: {{ last_fetch.strftime('%Y-%m-%d %H:%M:%S UTC') if last_fetch else 'N/A' }}</p>
    <p>Cache expires: {{ expires_at.strftime('%Y-%m-%d %H:%M:%S UTC') if expires_at else 'N/A' }}</p>
  </div>

  <div class="button-container">
    <button class="btn" onclick="location.reload()">Refresh Page</button>
    <a href="/refresh" class="btn btn-secondary">Force Refresh Articles</a>
    <a href="/debug" class="btn btn-secondary" target="_blank">Debug Info</a>
    <a href="/api/articles" class="btn btn-secondary" target="_blank">JSON API</a>
  </div>

  <div class="year-filter">
    <button onclick="filterByYear('all')" class="active" id="filter-all">All Years</button>
    {% for year in years %}
    <button onclick="filterByYear('{{ year }}')" id="filter-{{ year }}">{{ year }}</button>
    {% endfor %}
  </div>

  <div id="articles">
    {% for article in articles %}
    <div class="article" data-year="{{ article.year }}">
      <div class="article-title">
        <a href="{{ article.url }}" target="_blank" rel="noopener noreferrer">{{ article.title }}</a>
      </div>
      <div class="article-date">{{ article.publish_date.strftime('%B %d, %Y') }}</div>
    </div>
    {% else %}
    <p class="empty">No articles found. This could be due to anti-scraping measures.
      Try the Debug Info or Force Refresh buttons, or check the server logs.</p>
    {% endfor %}
  </div>

  <script>
    function filterByYear(year) {
      document.querySelectorAll('.year-filter button').forEach(btn => btn.classList.remove('active'));
      document.getElementById('filter-' + year).classList.add('active');
      document.querySelectorAll('.article').forEach(article => {
        article.style.display = (year === 'all' || article.dataset.year === year) ? 'block' : 'none';
      });
    }

    setTimeout(() => location.reload(), {{ reload_after_ms }});
  </script>
</body>
</html>
"""

ERROR_PAGE_TEMPLATE = """<html>
  <body style="font-family: Arial, sans-serif; text-align: center; padding: 50px;">
    <h1>Error</h1>
    <p>{{ message }}</p>
    <button onclick="location.reload()">Retry</button>
  </body>
</html>
"""

_environment = Environment(loader=BaseLoader(), autoescape=True)


def render_articles_page(**context) -> str:
    return _environment.from_string(ARTICLES_PAGE_TEMPLATE).render(**context)


def render_error_page(message: str) -> str:
    return _environment.from_string(ERROR_PAGE_TEMPLATE).render(message=message)
