"""Pytest configuration and fixtures."""

import pytest

from clinical_literature.config import PubMedConfig
from clinical_literature.data_sources.pubmed import PubMedClient

# Two complete articles, as EFetch returns them (trimmed).
TWO_ARTICLES_XML = """<?xml version="1.0" ?>
<!DOCTYPE PubmedArticleSet PUBLIC "-//NLM//DTD PubMedArticle, 1st January 2024//EN" "https://dtd.nlm.nih.gov/ncbi/pubmed/out/pubmed_240101.dtd">
<PubmedArticleSet>
  <PubmedArticle>
    <MedlineCitation Status="MEDLINE" Owner="NLM">
      <PMID Version="1">33567185</PMID>
      <Article PubModel="Print-Electronic">
        <Journal>
          <JournalIssue CitedMedium="Internet">
            <Volume>384</Volume>
            <Issue>11</Issue>
            <PubDate>
              <Year>2021</Year>
              <Month>Mar</Month>
              <Day>18</Day>
            </PubDate>
          </JournalIssue>
          <Title>The New England journal of medicine</Title>
          <ISOAbbreviation>N Engl J Med</ISOAbbreviation>
        </Journal>
        <ArticleTitle>Once-Weekly Semaglutide in Adults with Overweight or Obesity.</ArticleTitle>
        <Abstract>
          <AbstractText Label="BACKGROUND">Obesity is a global health challenge.</AbstractText>
          <AbstractText Label="RESULTS">Mean change in body weight was -14.9%.</AbstractText>
        </Abstract>
        <AuthorList CompleteYN="N">
          <Author ValidYN="Y">
            <LastName>Wilding</LastName>
            <ForeName>John P H</ForeName>
            <Initials>JPH</Initials>
            <AffiliationInfo>
              <Affiliation>University of Liverpool, Liverpool, United Kingdom.</Affiliation>
            </AffiliationInfo>
          </Author>
          <Author ValidYN="Y">
            <LastName>Batterham</LastName>
            <ForeName>Rachel L</ForeName>
            <Initials>RL</Initials>
          </Author>
          <Author ValidYN="Y">
            <LastName>Calanna</LastName>
            <ForeName>Salvatore</ForeName>
            <Initials>S</Initials>
          </Author>
          <Author ValidYN="Y">
            <CollectiveName>STEP 1 Study Group</CollectiveName>
          </Author>
        </AuthorList>
        <PublicationTypeList>
          <PublicationType UI="D016428">Journal Article</PublicationType>
          <PublicationType UI="D016449">Randomized Controlled Trial</PublicationType>
        </PublicationTypeList>
      </Article>
      <MeshHeadingList>
        <MeshHeading>
          <DescriptorName UI="D019440" MajorTopicYN="N">Anti-Obesity Agents</DescriptorName>
          <QualifierName UI="Q000008" MajorTopicYN="N">administration &amp; dosage</QualifierName>
        </MeshHeading>
        <MeshHeading>
          <DescriptorName UI="D015992" MajorTopicYN="N">Body Mass Index</DescriptorName>
        </MeshHeading>
      </MeshHeadingList>
      <KeywordList Owner="NOTNLM">
        <Keyword MajorTopicYN="N">GLP-1</Keyword>
      </KeywordList>
    </MedlineCitation>
    <PubmedData>
      <ArticleIdList>
        <ArticleId IdType="pubmed">33567185</ArticleId>
        <ArticleId IdType="doi">10.1056/NEJMoa2032183</ArticleId>
      </ArticleIdList>
      <ReferenceList>
        <Reference>
          <Citation>Some cited paper.</Citation>
          <ArticleIdList>
            <ArticleId IdType="doi">10.9999/cited.paper</ArticleId>
            <ArticleId IdType="pmc">PMC0000001</ArticleId>
          </ArticleIdList>
        </Reference>
      </ReferenceList>
    </PubmedData>
  </PubmedArticle>
  <PubmedArticle>
    <MedlineCitation Status="MEDLINE" Owner="NLM">
      <PMID Version="1">35658024</PMID>
      <Article PubModel="Print-Electronic">
        <Journal>
          <JournalIssue CitedMedium="Internet">
            <Volume>387</Volume>
            <Issue>3</Issue>
            <PubDate>
              <Year>2022</Year>
              <Month>Jul</Month>
            </PubDate>
          </JournalIssue>
          <Title>The New England journal of medicine</Title>
          <ISOAbbreviation>N Engl J Med</ISOAbbreviation>
        </Journal>
        <ArticleTitle>Tirzepatide Once Weekly for the Treatment of Obesity.</ArticleTitle>
        <Abstract>
          <AbstractText>Obesity is a chronic disease.</AbstractText>
        </Abstract>
        <AuthorList CompleteYN="Y">
          <Author ValidYN="Y">
            <LastName>Jastreboff</LastName>
            <ForeName>Ania M</ForeName>
            <Initials>AM</Initials>
          </Author>
        </AuthorList>
        <PublicationTypeList>
          <PublicationType UI="D016428">Journal Article</PublicationType>
        </PublicationTypeList>
      </Article>
    </MedlineCitation>
    <PubmedData>
      <ArticleIdList>
        <ArticleId IdType="pubmed">35658024</ArticleId>
        <ArticleId IdType="doi">10.1056/NEJMoa2206038</ArticleId>
        <ArticleId IdType="pmc">PMC9999999</ArticleId>
      </ArticleIdList>
    </PubmedData>
  </PubmedArticle>
</PubmedArticleSet>
"""


@pytest.fixture
def pubmed_config() -> PubMedConfig:
    """Client config with test credentials."""
    return PubMedConfig(email="test@example.org", tool="clinical_literature_tests")


@pytest.fixture
async def pubmed_client(pubmed_config):
    """Create and tear down a PubMedClient."""
    c = PubMedClient(pubmed_config)
    yield c
    await c.close()


@pytest.fixture
def two_articles_xml() -> str:
    return TWO_ARTICLES_XML
