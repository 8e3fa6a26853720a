"""HTML template assets for report rendering."""

from __future__ import annotations


def render_html_document(
    *,
    title: str,
    subtitle: str,
    dashboard_cards: str,
    readiness_panel: str,
    retirement_table: str,
    insurance_panel: str,
    goals_table: str,
    calculators_panel: str,
    net_worth_panel: str,
    risk_profile_panel: str,
    validation_table: str,
    payload_json: str,
) -> str:
    return f"""<!doctype html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
  <title>{title}</title>
  <style>
    :root {{
      --bg: #eef3ef;
      --panel: #fcfffd;
      --ink: #1f2937;
      --muted: #6b7280;
      --line: #c4d6cb;
      --brand: #0f766e;
      --ok: #166534;
      --caution: #92400e;
      --warn: #991b1b;
    }}
    * {{ box-sizing: border-box; }}
    body {{ margin: 0; font-family: 'Trebuchet MS', 'Segoe UI', sans-serif; color: var(--ink); background: radial-gradient(circle at top right, #c9ebdc 0, var(--bg) 45%); }}
    .wrap {{ max-width: 1280px; margin: 0 auto; padding: 1rem; }}
    h1 {{ margin: 0.1rem 0 0.25rem; font-size: 1.9rem; }}
    h3 {{ margin: 0.9rem 0 0.4rem; }}
    .meta {{ color: var(--muted); font-size: 0.95rem; margin-bottom: 0.8rem; }}
    .tabs {{ display: flex; flex-wrap: wrap; gap: 0.5rem; margin: 0.75rem 0; }}
    .tab-btn {{ border: 1px solid var(--line); background: #fff; padding: 0.45rem 0.75rem; cursor: pointer; border-radius: 999px; font-weight: 700; }}
    .tab-btn.active {{ background: var(--brand); color: #fff; border-color: var(--brand); }}
    .tab {{ display: none; }}
    .tab.active {{ display: block; }}
    .panel {{ background: var(--panel); border: 1px solid var(--line); border-radius: 14px; padding: 0.85rem; margin-bottom: 0.85rem; }}
    .grid {{ display: grid; gap: 0.75rem; grid-template-columns: repeat(auto-fit, minmax(280px, 1fr)); }}
    .cards {{ display: grid; gap: 0.6rem; grid-template-columns: repeat(auto-fit, minmax(180px, 1fr)); margin-bottom: 0.75rem; }}
    .card {{ background: #fff; border: 1px solid var(--line); border-radius: 12px; padding: 0.65rem; }}
    .card .k {{ color: var(--muted); font-size: 0.85rem; }}
    .card .v {{ font-size: 1.2rem; font-weight: 700; }}
    .banner {{ font-size: 1.3rem; font-weight: 700; padding: 0.5rem 0.75rem; border-radius: 10px; margin-bottom: 0.5rem; }}
    .banner.ok {{ background: #dcfce7; color: var(--ok); }}
    .banner.caution {{ background: #fef3c7; color: var(--caution); }}
    .banner.warn {{ background: #ffe3e3; color: var(--warn); }}
    canvas {{ width: 100%; height: 260px; display: block; background: #fff; border: 1px solid #d8e6dd; border-radius: 10px; }}
    table {{ border-collapse: collapse; width: 100%; font-size: 0.9rem; }}
    th, td {{ border: 1px solid #d5e3da; padding: 0.35rem 0.45rem; text-align: right; }}
    th:first-child, td:first-child {{ text-align: left; }}
    .table-wrap {{ max-height: 420px; overflow-y: auto; }}
    .insolvent {{ background: #ffe3e3; color: var(--warn); font-weight: 700; }}
    .retirement-year {{ background: #e0f2fe; }}
    .legacy {{ color: var(--muted); }}
    .subtle {{ color: var(--muted); font-size: 0.85rem; }}
    @media (max-width: 700px) {{
      h1 {{ font-size: 1.5rem; }}
      .tab-btn {{ font-size: 0.9rem; }}
      canvas {{ height: 220px; }}
    }}
  </style>
</head>
<body>
  <div class=\"wrap\">
    <h1>{title}</h1>
    <div class=\"meta\">{subtitle}</div>
    <div class=\"tabs\" id=\"tabs\">
      <button class=\"tab-btn active\" data-tab=\"dashboard\">Dashboard</button>
      <button class=\"tab-btn\" data-tab=\"retirement\">Retirement</button>
      <button class=\"tab-btn\" data-tab=\"insurance\">Insurance</button>
      <button class=\"tab-btn\" data-tab=\"goals\">Goals</button>
      <button class=\"tab-btn\" data-tab=\"calculators\">Calculators</button>
      <button class=\"tab-btn\" data-tab=\"net-worth\">Net Worth</button>
      <button class=\"tab-btn\" data-tab=\"risk-profile\">Risk Profile</button>
      <button class=\"tab-btn\" data-tab=\"validation\">Plan Validation</button>
    </div>

    <section class=\"tab active\" id=\"tab-dashboard\">
      <div class=\"cards\">{dashboard_cards}</div>
      <div class=\"panel\">{readiness_panel}</div>
      <div class=\"panel\"><canvas id=\"chart-corpus\"></canvas></div>
    </section>

    <section class=\"tab\" id=\"tab-retirement\">
      <div class=\"grid\">
        <div class=\"panel\"><canvas id=\"chart-flows\"></canvas></div>
        <div class=\"panel\"><canvas id=\"chart-withdrawal-rate\"></canvas></div>
      </div>
      <div class=\"panel table-wrap\">{retirement_table}</div>
    </section>

    <section class=\"tab\" id=\"tab-insurance\">
      <div class=\"panel\">{insurance_panel}</div>
      <div class=\"panel\"><canvas id=\"chart-insurance\"></canvas></div>
    </section>

    <section class=\"tab\" id=\"tab-goals\">
      <div class=\"panel\">{goals_table}</div>
      <div class=\"panel\"><canvas id=\"chart-goals\"></canvas></div>
    </section>

    <section class=\"tab\" id=\"tab-calculators\">
      <div class=\"panel\">{calculators_panel}</div>
    </section>

    <section class=\"tab\" id=\"tab-net-worth\">
      <div class=\"panel\">{net_worth_panel}</div>
    </section>

    <section class=\"tab\" id=\"tab-risk-profile\">
      <div class=\"panel\">{risk_profile_panel}</div>
    </section>

    <section class=\"tab\" id=\"tab-validation\">
      <div class=\"panel\">{validation_table}</div>
    </section>
  </div>

  <script>
    const payload = {payload_json};

    function fmtMoney(v) {{
      return (payload.currency || '') + (Number(v || 0)).toLocaleString('en-IN', {{ maximumFractionDigits: 0 }});
    }}

    function tabsInit() {{
      const buttons = [...document.querySelectorAll('.tab-btn')];
      buttons.forEach((btn) => {{
        btn.addEventListener('click', () => {{
          buttons.forEach((b) => b.classList.remove('active'));
          btn.classList.add('active');
          [...document.querySelectorAll('.tab')].forEach((tab) => tab.classList.remove('active'));
          document.getElementById(`tab-${{btn.dataset.tab}}`).classList.add('active');
          renderAll();
        }});
      }});
    }}

    function setup(canvasId) {{
      const c = document.getElementById(canvasId); if (!c) return null;
      const rect = c.getBoundingClientRect(); c.width = Math.max(380, Math.floor(rect.width)); c.height = Math.max(200, Math.floor(rect.height));
      const ctx = c.getContext('2d'); ctx.clearRect(0, 0, c.width, c.height);
      return {{ ctx, w: c.width, h: c.height }};
    }}

    function drawAxes(ctx, w, h) {{
      ctx.strokeStyle = '#ddd';
      ctx.lineWidth = 1;
      ctx.beginPath();
      ctx.moveTo(40, 10); ctx.lineTo(40, h - 24); ctx.lineTo(w - 8, h - 24); ctx.stroke();
    }}

    function drawMarker(ctx, w, h, idx, count, color, label) {{
      if (idx === null || idx === undefined) return;
      const x = 40 + (idx * (w - 56) / Math.max(1, count - 1));
      ctx.strokeStyle = color; ctx.setLineDash([4, 4]); ctx.beginPath();
      ctx.moveTo(x, 10); ctx.lineTo(x, h - 24); ctx.stroke(); ctx.setLineDash([]);
      ctx.fillStyle = color; ctx.font = '11px sans-serif'; ctx.fillText(label, x + 4, 36);
    }}

    function drawLine(canvasId, ages, series, title, color, formatter) {{
      const s = setup(canvasId); if (!s) return null;
      const {{ ctx, w, h }} = s;
      drawAxes(ctx, w, h);
      const vals = series.map(Number); const maxV = Math.max(1, ...vals);
      const minV = Math.min(0, ...vals); const span = Math.max(1, maxV - minV);
      ctx.strokeStyle = color; ctx.lineWidth = 2; ctx.beginPath();
      vals.forEach((v, i) => {{
        const x = 40 + (i * (w - 56) / Math.max(1, vals.length - 1));
        const y = (h - 24) - ((v - minV) / span) * (h - 38);
        if (i === 0) ctx.moveTo(x, y); else ctx.lineTo(x, y);
      }});
      ctx.stroke();
      ctx.fillStyle = '#111'; ctx.font = 'bold 12px sans-serif'; ctx.fillText(title, 46, 22);
      ctx.fillStyle = '#666'; ctx.font = '11px sans-serif';
      ctx.fillText(String(ages[0] ?? ''), 40, h - 8);
      ctx.fillText(String(ages[ages.length - 1] ?? ''), w - 40, h - 8);
      ctx.fillText((formatter || fmtMoney)(maxV), 4, 20);
      return s;
    }}

    function drawBars(canvasId, labels, stacks, title) {{
      const s = setup(canvasId); if (!s) return;
      const {{ ctx, w, h }} = s;
      drawAxes(ctx, w, h);
      const names = Object.keys(stacks);
      const palette = ['#0f766e','#1d4ed8','#b91c1c','#92400e','#6b21a8','#be123c'];
      const totals = labels.map((_, i) => names.reduce((sum, n) => sum + Number((stacks[n] || [])[i] || 0), 0));
      const maxV = Math.max(1, ...totals);
      labels.forEach((_, i) => {{
        const x = 44 + i * (w - 58) / Math.max(1, labels.length);
        const bw = Math.max(2, (w - 70) / Math.max(1, labels.length) - 1);
        let top = h - 24;
        names.forEach((name, idx) => {{
          const v = Number((stacks[name] || [])[i] || 0);
          if (v <= 0) return;
          const bh = (v / maxV) * (h - 38);
          ctx.fillStyle = palette[idx % palette.length];
          ctx.fillRect(x, top - bh, bw, bh);
          top -= bh;
        }});
      }});
      ctx.font = '11px sans-serif';
      names.forEach((name, idx) => {{
        ctx.fillStyle = palette[idx % palette.length];
        ctx.fillText(name, w - 120, 20 + idx * 14);
      }});
      ctx.fillStyle = '#111'; ctx.font = 'bold 12px sans-serif'; ctx.fillText(title, 46, 22);
    }}

    function drawGrouped(canvasId, labels, series, title) {{
      const s = setup(canvasId); if (!s) return;
      const {{ ctx, w, h }} = s;
      drawAxes(ctx, w, h);
      const names = Object.keys(series);
      const palette = ['#1d4ed8','#0f766e'];
      const maxV = Math.max(1, ...names.flatMap((n) => series[n].map(Number)));
      const slot = (w - 58) / Math.max(1, labels.length);
      labels.forEach((label, i) => {{
        names.forEach((name, idx) => {{
          const v = Number(series[name][i] || 0);
          const bh = (Math.max(0, v) / maxV) * (h - 38);
          const bw = Math.max(2, slot / (names.length + 1));
          ctx.fillStyle = palette[idx % palette.length];
          ctx.fillRect(44 + i * slot + idx * bw, (h - 24) - bh, bw - 1, bh);
        }});
        ctx.fillStyle = '#666'; ctx.font = '11px sans-serif'; ctx.fillText(label, 44 + i * slot, h - 8);
      }});
      ctx.fillStyle = '#111'; ctx.font = 'bold 12px sans-serif'; ctx.fillText(title, 46, 22);
    }}

    function renderAll() {{
      const charts = payload.charts;
      const ages = charts.ages;
      if (ages.length > 0) {{
        const s = drawLine('chart-corpus', ages, charts.corpus, 'Corpus at Beginning of Year', '#0f766e');
        if (s) {{
          drawMarker(s.ctx, s.w, s.h, charts.retirementIndex, ages.length, '#1d4ed8', 'Retirement');
          drawMarker(s.ctx, s.w, s.h, charts.exhaustedIndex, ages.length, '#b91c1c', 'Funds exhausted');
        }}
        drawBars('chart-flows', ages, charts.flows, 'Savings, Returns and Withdrawals');
        drawLine('chart-withdrawal-rate', ages, charts.withdrawalRate, 'Withdrawal Rate', '#b91c1c', (v) => `${{v.toFixed(1)}}%`);
      }}
      const ins = charts.insurance;
      if (Object.keys(ins).length > 0) {{
        drawBars('chart-insurance', ['Need'], Object.fromEntries(Object.entries(ins).map(([k, v]) => [k, [v]])), 'Insurance Need Breakdown');
      }}
      if (charts.goals.labels.length > 0) {{
        drawGrouped('chart-goals', charts.goals.labels, {{ target: charts.goals.target, capital: charts.goals.capital }}, 'Goal Target vs Final Capital');
      }}
    }}

    tabsInit();
    renderAll();
    addEventListener('resize', () => renderAll());
  </script>
</body>
</html>
"""
